from __future__ import annotations

import logging

from fastapi.routing import APIRoute
from starlette.requests import Request

from fcm_tester.request_context import current_endpoint, endpoint_label


logger = logging.getLogger(__name__)


class ApiEndpointRoute(APIRoute):
    """Labels each API call for the relay logs and records the status it answered with."""

    def get_route_handler(self):
        original_handler = super().get_route_handler()

        async def labelled_handler(request: Request):
            label = endpoint_label(request.method, self.path)
            token = current_endpoint.set(label)
            try:
                response = await original_handler(request)
            finally:
                current_endpoint.reset(token)
            logger.debug('api_request_finished endpoint=%s status=%s', label, response.status_code)
            return response

        return labelled_handler
