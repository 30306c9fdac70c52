from __future__ import annotations

import threading

from fcm_tester.config import settings
from fcm_tester.providers import FirebaseProvider, ProviderHandle


_handle: ProviderHandle | None = None
_handle_lock = threading.Lock()


def _read_credential() -> str | None:
    return settings.firebase_service_account_key


def build_provider_handle() -> ProviderHandle:
    return ProviderHandle(
        _read_credential,
        lambda credential: FirebaseProvider.from_credential(
            credential,
            app_name=settings.firebase_app_name,
            dry_run=settings.fcm_dry_run,
        ),
    )


def set_provider_handle(handle: ProviderHandle | None) -> None:
    global _handle
    with _handle_lock:
        _handle = handle


def get_provider_handle() -> ProviderHandle:
    global _handle
    with _handle_lock:
        if _handle is None:
            _handle = build_provider_handle()
        return _handle
