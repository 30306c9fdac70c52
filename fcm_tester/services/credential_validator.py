"""Shape checks for the Firebase service account JSON kept in configuration.

Only the shape is checked here. Whether Google accepts the key is discovered
on the first send.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

REQUIRED_FIELDS = ('type', 'project_id', 'private_key_id', 'private_key', 'client_email')

STATUS_ABSENT = 'absent'
STATUS_PARSE_ERROR = 'parse-error'
STATUS_MISSING_FIELDS = 'missing-fields'
STATUS_OK = 'ok'

ENV_VAR_NAME = 'FIREBASE_SERVICE_ACCOUNT_KEY'


@dataclass(frozen=True)
class ValidationResult:
    status: str
    message: str
    hint: str | None = None
    error: str | None = None
    missing_fields: tuple[str, ...] = ()
    project_id: str | None = None
    client_email: str | None = None
    credential: dict[str, Any] | None = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_status_payload(self) -> dict[str, str]:
        """Body for ``GET /api/check-firebase``. Key material never leaves this object."""
        if self.ok:
            return {
                'status': 'success',
                'message': self.message,
                'projectId': self.project_id or '',
                'serviceAccountEmail': self.client_email or '',
            }
        payload = {'status': 'error', 'message': self.message}
        if self.hint:
            payload['hint'] = self.hint
        if self.error:
            payload['error'] = self.error
        return payload


def validate(raw: str | None) -> ValidationResult:
    if raw is None or not raw.strip():
        return ValidationResult(
            status=STATUS_ABSENT,
            message=f'{ENV_VAR_NAME} environment variable is not set.',
            hint=f'Create a .env file and set {ENV_VAR_NAME} to the Firebase service account key JSON.',
        )

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        return ValidationResult(
            status=STATUS_PARSE_ERROR,
            message='Failed to parse service account JSON.',
            hint=(
                f'Check that {ENV_VAR_NAME} holds valid JSON on a single line; '
                'literal newlines must be removed from the embedded key material.'
            ),
            error=str(exc),
        )

    if not isinstance(parsed, dict):
        return ValidationResult(
            status=STATUS_PARSE_ERROR,
            message='Failed to parse service account JSON.',
            hint=f'{ENV_VAR_NAME} must be a JSON object, not a {type(parsed).__name__}.',
            error=f'expected object, got {type(parsed).__name__}',
        )

    missing = tuple(name for name in REQUIRED_FIELDS if not parsed.get(name))
    if missing:
        return ValidationResult(
            status=STATUS_MISSING_FIELDS,
            message=f'Required fields are missing: {", ".join(missing)}',
            hint='Paste the full service account key JSON downloaded from the Firebase Console.',
            missing_fields=missing,
        )

    return ValidationResult(
        status=STATUS_OK,
        message='Firebase configuration looks valid.',
        project_id=str(parsed['project_id']),
        client_email=str(parsed['client_email']),
        credential=parsed,
    )


def normalize_private_key(credential: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(credential)
    private_key = normalized.get('private_key')
    if isinstance(private_key, str):
        normalized['private_key'] = private_key.replace('\\n', '\n')
    return normalized
