from __future__ import annotations


class FcmTesterError(Exception):
    """Base class for errors the API reports as ``{"error": ..., "hint": ...}``."""

    status_code = 500

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_payload(self) -> dict[str, str]:
        payload = {'error': self.message}
        if self.hint:
            payload['hint'] = self.hint
        return payload


class InvalidMessageRequest(FcmTesterError, ValueError):
    status_code = 400


class ProviderInitializationError(FcmTesterError):
    pass


class ProviderSendError(FcmTesterError):
    def __init__(self, message: str, hint: str | None = None, code: str | None = None) -> None:
        super().__init__(message, hint)
        self.code = code
