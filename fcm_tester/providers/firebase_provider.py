from __future__ import annotations

import logging
from typing import Any

import firebase_admin
from firebase_admin import credentials, exceptions as firebase_exceptions, messaging

from fcm_tester.exceptions import InvalidMessageRequest, ProviderInitializationError, ProviderSendError
from fcm_tester.providers.base import BaseProvider
from fcm_tester.services.credential_validator import normalize_private_key


logger = logging.getLogger(__name__)

NOTIFICATION_FIELDS = ('title', 'body', 'image')
ANDROID_NOTIFICATION_FIELDS = ('sound', 'color', 'icon', 'tag', 'click_action', 'channel_id')
APNS_FIELDS = ('badge',)

# SDK error classes whose generic code (NOT_FOUND, INVALID_ARGUMENT) hides the FCM cause.
_SDK_ERROR_CODES = (
    (messaging.UnregisteredError, 'registration-token-not-registered'),
    (messaging.SenderIdMismatchError, 'sender-id-mismatch'),
)


def _build_notification_config(section: dict[str, str]) -> dict[str, Any]:
    unsupported = [
        key for key in section
        if key not in NOTIFICATION_FIELDS + ANDROID_NOTIFICATION_FIELDS + APNS_FIELDS
    ]
    if unsupported:
        supported = ', '.join(NOTIFICATION_FIELDS + ANDROID_NOTIFICATION_FIELDS + APNS_FIELDS)
        raise InvalidMessageRequest(
            f'Unsupported notification field: {", ".join(unsupported)}',
            hint=f'Notification fields accepted by FCM: {supported}. Put anything else in the data section.',
        )

    config: dict[str, Any] = {}
    base = {key: section[key] for key in NOTIFICATION_FIELDS if section.get(key)}
    if base:
        config['notification'] = messaging.Notification(**base)

    android = {key: section[key] for key in ANDROID_NOTIFICATION_FIELDS if section.get(key)}
    if android:
        config['android'] = messaging.AndroidConfig(notification=messaging.AndroidNotification(**android))

    if section.get('badge'):
        try:
            badge = int(section['badge'])
        except ValueError as exc:
            raise InvalidMessageRequest(f'Notification badge must be an integer, got {section["badge"]!r}') from exc
        config['apns'] = messaging.APNSConfig(payload=messaging.APNSPayload(aps=messaging.Aps(badge=badge)))
    return config


def to_sdk_message(message: dict[str, Any]) -> messaging.Message:
    kwargs: dict[str, Any] = {'token': message['token']}
    data = message.get('data') or {}
    if data:
        kwargs['data'] = {str(key): str(value) for key, value in data.items()}
    notification = message.get('notification') or {}
    if notification:
        kwargs.update(_build_notification_config(notification))
    return messaging.Message(**kwargs)


class FirebaseProvider(BaseProvider):
    name = 'firebase'

    def __init__(self, app: firebase_admin.App, *, dry_run: bool = False) -> None:
        self.app = app
        self.dry_run = dry_run

    @classmethod
    def from_credential(cls, credential: dict[str, Any], *, app_name: str, dry_run: bool = False) -> 'FirebaseProvider':
        normalized = normalize_private_key(credential)
        try:
            stale = firebase_admin.get_app(app_name)
        except ValueError:
            stale = None
        if stale is not None:
            firebase_admin.delete_app(stale)
            logger.info('firebase_app_deleted name=%s', app_name)

        try:
            app = firebase_admin.initialize_app(
                credentials.Certificate(normalized),
                {'projectId': normalized['project_id']},
                name=app_name,
            )
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.error('firebase_app_init_failed name=%s error=%s', app_name, exc)
            raise ProviderInitializationError(
                f'Firebase app initialization failed: {exc}',
                hint='Check that FIREBASE_SERVICE_ACCOUNT_KEY holds a service account key with a valid private_key.',
            ) from exc

        logger.info('firebase_app_initialized name=%s project_id=%s', app.name, normalized['project_id'])
        return cls(app, dry_run=dry_run)

    def send(self, message: dict[str, Any]) -> str:
        sdk_message = to_sdk_message(message)
        try:
            return messaging.send(sdk_message, dry_run=self.dry_run, app=self.app)
        except firebase_exceptions.FirebaseError as exc:
            code = next((name for error_type, name in _SDK_ERROR_CODES if isinstance(exc, error_type)), exc.code)
            raise ProviderSendError(str(exc), code=code) from exc
        except ValueError as exc:
            raise ProviderSendError(str(exc)) from exc

    def close(self) -> None:
        firebase_admin.delete_app(self.app)
        logger.info('firebase_app_deleted name=%s', self.app.name)
