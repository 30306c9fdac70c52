import unittest

from fastapi.testclient import TestClient

from fcm_tester.app_state import get_provider_handle
from fcm_tester.main import app


class AppTests(unittest.TestCase):
    def test_health_static_and_handle_lifecycle(self):
        with TestClient(app) as client:
            self.assertEqual(client.get('/health').json(), {'status': 'ok'})
            self.assertEqual(client.get('/ui-static/app.js').status_code, 200)
            handle = get_provider_handle()
            self.assertFalse(handle.initialized)
        self.assertIsNot(get_provider_handle(), handle)
