from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from fcm_tester.exceptions import InvalidMessageRequest, ProviderSendError
from fcm_tester.providers.handle import ProviderHandle
from fcm_tester.request_context import current_endpoint
from fcm_tester.schemas import SendMessageRequest
from fcm_tester.services.message_builder import build_message


logger = logging.getLogger(__name__)

HINT_TOKEN_EXPIRED = 'The FCM token is invalid or has expired. Request a new token from the client app.'
HINT_TOKEN_MALFORMED = 'The FCM token format is not valid.'
HINT_PERMISSION = 'Check the Firebase project permissions for this service account.'

# Matched in order against the lowercased error message and error code.
# NOT_FOUND alone is not token-specific; FirebaseProvider.send names unregistered tokens.
_HINT_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (('registration-token-not-registered', 'unregistered'), HINT_TOKEN_EXPIRED),
    (('invalid-registration-token', 'registration token is not a valid', 'invalid registration token'), HINT_TOKEN_MALFORMED),
    (('permission', 'unauthenticated', 'sender-id-mismatch', 'senderid mismatch'), HINT_PERMISSION),
)


@dataclass(frozen=True)
class RelayResult:
    message_id: str
    sent_message: dict[str, Any]


def hint_for_error(message: str, code: str | None = None) -> str | None:
    haystack = f'{message} {code or ""}'.lower()
    for needles, hint in _HINT_RULES:
        if any(needle in haystack for needle in needles):
            return hint
    return None


def _token_prefix(token: str) -> str:
    return f'{token[:8]}...' if len(token) > 8 else '***'


def relay(handle: ProviderHandle, spec: SendMessageRequest) -> RelayResult:
    provider = handle.get()

    if not spec.token.strip():
        raise InvalidMessageRequest('An FCM token is required.')

    message = {key: value for key, value in build_message(spec).items() if key == 'token' or value}
    logger.info(
        'fcm_send_requested endpoint=%s message_type=%s token=%s payload=%s',
        current_endpoint.get(),
        spec.message_type,
        _token_prefix(message['token']),
        json.dumps({key: value for key, value in message.items() if key != 'token'}, ensure_ascii=False),
    )

    try:
        message_id = provider.send(message)
    except ProviderSendError as exc:
        hint = exc.hint or hint_for_error(exc.message, exc.code)
        logger.warning('fcm_send_failed code=%s error=%s', exc.code, exc.message)
        raise ProviderSendError(exc.message, hint=hint, code=exc.code) from exc

    logger.info('fcm_send_succeeded message_id=%s', message_id)
    return RelayResult(message_id=message_id, sent_message=message)
