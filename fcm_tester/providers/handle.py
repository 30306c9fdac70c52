from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from fcm_tester.exceptions import ProviderInitializationError
from fcm_tester.providers.base import BaseProvider
from fcm_tester.services.credential_validator import validate


logger = logging.getLogger(__name__)

ProviderFactory = Callable[[dict[str, Any]], BaseProvider]


class ProviderHandle:
    """Owns the process's provider client and builds it on first use.

    Construction runs under a lock, so concurrent first requests build at most
    one client. A failed validation is not remembered: the credential is read
    again on the next call until a client exists.
    """

    def __init__(self, credential_source: Callable[[], str | None], factory: ProviderFactory) -> None:
        self._credential_source = credential_source
        self._factory = factory
        self._provider: BaseProvider | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._provider is not None

    def get(self) -> BaseProvider:
        provider = self._provider
        if provider is not None:
            return provider
        with self._lock:
            if self._provider is None:
                result = validate(self._credential_source())
                if not result.ok:
                    logger.warning('provider_init_rejected status=%s', result.status)
                    message = f'{result.message} {result.error}' if result.error else result.message
                    raise ProviderInitializationError(message, hint=result.hint)
                self._provider = self._factory(result.credential or {})
                logger.info('provider_initialized name=%s project_id=%s', self._provider.name, result.project_id)
            return self._provider

    def reset(self) -> None:
        with self._lock:
            provider, self._provider = self._provider, None
        if provider is not None:
            provider.close()
