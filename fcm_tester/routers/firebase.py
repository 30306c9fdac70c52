from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from fcm_tester.app_state import get_provider_handle
from fcm_tester.config import settings
from fcm_tester.exceptions import FcmTesterError
from fcm_tester.providers.handle import ProviderHandle
from fcm_tester.route_logging import ApiEndpointRoute
from fcm_tester.schemas import PreviewResponse, SendMessageRequest, SendMessageResponse
from fcm_tester.services.credential_validator import validate
from fcm_tester.services.message_builder import preview_message
from fcm_tester.services.relay_service import relay


router = APIRouter(prefix='/api', tags=['FCM'], route_class=ApiEndpointRoute)
logger = logging.getLogger(__name__)


class _BadRequest(Exception):
    pass


async def _parse_send_request(request: Request) -> SendMessageRequest:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise _BadRequest(f'Request body is not valid JSON: {exc}') from exc
    if not isinstance(body, dict):
        raise _BadRequest('Request body must be a JSON object.')
    try:
        return SendMessageRequest.model_validate(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = '.'.join(str(part) for part in first.get('loc', ()))
        raise _BadRequest(f'Invalid request field {location}: {first.get("msg")}') from exc


@router.get('/check-firebase')
def check_firebase():
    result = validate(settings.firebase_service_account_key)
    if not result.ok:
        logger.info('firebase_check_failed status=%s', result.status)
    return result.to_status_payload()


@router.post('/send-fcm')
async def send_fcm(request: Request, handle: ProviderHandle = Depends(get_provider_handle)):
    try:
        spec = await _parse_send_request(request)
    except _BadRequest as exc:
        return JSONResponse(status_code=400, content={'error': str(exc)})

    try:
        result = await run_in_threadpool(relay, handle, spec)
    except FcmTesterError as exc:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())
    except Exception as exc:
        logger.exception('fcm_send_unexpected_error')
        return JSONResponse(status_code=500, content={'error': f'Unexpected error: {exc}'})

    response = SendMessageResponse(message_id=result.message_id, sent_message=result.sent_message)
    return response.model_dump(by_alias=True)


@router.post('/preview-message', response_model=PreviewResponse)
async def preview(request: Request):
    try:
        spec = await _parse_send_request(request)
    except _BadRequest as exc:
        return JSONResponse(status_code=400, content={'error': str(exc)})
    return PreviewResponse(message=preview_message(spec))
