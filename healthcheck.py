import sys

import httpx

from fcm_tester.config import settings
from fcm_tester.services.credential_validator import validate


GREEN = '\033[32m'
RED = '\033[31m'
RESET = '\033[0m'


def run_check(name, fn):
    try:
        message = fn() or ''
        suffix = f' - {message}' if message else ''
        print(f'{GREEN}PASS{RESET} {name}{suffix}')
        return True
    except Exception as exc:
        print(f'{RED}FAIL{RESET} {name} - {exc}')
        return False


def check_service_account_key():
    result = validate(settings.firebase_service_account_key)
    if not result.ok:
        detail = f' ({result.error})' if result.error else ''
        raise RuntimeError(f'{result.message}{detail}')
    return f'project_id={result.project_id}'


def check_server_health():
    res = httpx.get(f'{settings.app_base_url.rstrip("/")}/health', timeout=5)
    if res.status_code != 200:
        raise RuntimeError(f'HTTP {res.status_code} from {settings.app_base_url}')
    return 'server responding'


def check_server_firebase_status():
    res = httpx.get(f'{settings.app_base_url.rstrip("/")}/api/check-firebase', timeout=5)
    payload = res.json()
    if payload.get('status') != 'success':
        raise RuntimeError(f"{payload.get('message')} {payload.get('hint') or ''}".strip())
    return f"project_id={payload.get('projectId')}"


def main():
    checks = [
        ('Service account key is well-formed', check_service_account_key),
        ('Server reachable', check_server_health),
        ('Server sees a valid Firebase configuration', check_server_firebase_status),
    ]

    all_ok = True
    for name, fn in checks:
        all_ok = run_check(name, fn) and all_ok

    if not all_ok:
        sys.exit(1)
    sys.exit(0)


if __name__ == '__main__':
    main()
