from __future__ import annotations

from contextvars import ContextVar


# Code run outside an API route (CLI, healthcheck, tests) keeps the default label.
DIRECT_CALL = 'direct-call'

current_endpoint: ContextVar[str] = ContextVar('current_endpoint', default=DIRECT_CALL)


def endpoint_label(method: str, path: str) -> str:
    return f'{method.upper()} {path}'
