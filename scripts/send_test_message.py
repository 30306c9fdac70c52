"""Post a fixed sample message to a running FCM Tester and print the outcome.

Usage: python scripts/send_test_message.py FCM_TOKEN [--url http://127.0.0.1:8000]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import httpx


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fcm_tester.config import settings


def build_sample_payload(token: str) -> dict:
    return {
        'token': token,
        'messageType': 'data-only',
        'username': 'testuser',
        'userId': '12345',
        'customTitle': 'Hello {{username}}',
        'customBody': 'You have a new message',
        'customLink': 'https://example.com/{{user_id}}',
    }


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Send a sample FCM message through the local tester.')
    parser.add_argument('token', nargs='?', help='Destination FCM registration token.')
    parser.add_argument('--url', default=settings.app_base_url, help='Base URL of the running tester.')
    return parser.parse_args(argv)


def send(base_url: str, payload: dict, client: httpx.Client | None = None) -> int:
    owns_client = client is None
    client = client or httpx.Client(timeout=30)
    try:
        print('Sending sample FCM message...')
        print('Payload:', json.dumps(payload, indent=2, ensure_ascii=False))
        try:
            response = client.post(f'{base_url.rstrip("/")}/api/send-fcm', json=payload)
        except httpx.HTTPError as exc:
            print(f'Network error: {exc}')
            return 2
        try:
            result = response.json()
        except ValueError:
            print('Failed!')
            print(f'Unexpected response (HTTP {response.status_code}):', response.text[:500])
            return 1
        if response.is_success:
            print('Success!')
            print('Message ID:', result.get('messageId'))
            print('Sent message:', json.dumps(result.get('sentMessage'), indent=2, ensure_ascii=False))
            return 0
        print('Failed!')
        print('Error:', result.get('error'))
        if result.get('hint'):
            print('Hint:', result['hint'])
        return 1
    finally:
        if owns_client:
            client.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.token:
        print('An FCM token is required.')
        print('Usage: python scripts/send_test_message.py YOUR_FCM_TOKEN')
        return 1
    return send(args.url, build_sample_payload(args.token))


if __name__ == '__main__':
    sys.exit(main())
