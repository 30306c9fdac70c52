import unittest
from unittest.mock import MagicMock, patch

from fakes import VALID_CREDENTIAL
from firebase_admin import exceptions as firebase_exceptions, messaging

from fcm_tester.exceptions import InvalidMessageRequest, ProviderInitializationError, ProviderSendError
from fcm_tester.providers.firebase_provider import FirebaseProvider, to_sdk_message


class ToSdkMessageTests(unittest.TestCase):
    def test_data_only_message(self):
        sdk_message = to_sdk_message({'token': 'abc', 'data': {'title': 'Hi', 'badge': 3}})
        self.assertEqual(sdk_message.token, 'abc')
        self.assertEqual(sdk_message.data, {'title': 'Hi', 'badge': '3'})
        self.assertIsNone(sdk_message.notification)
        self.assertIsNone(sdk_message.android)

    def test_notification_fields_are_routed(self):
        sdk_message = to_sdk_message(
            {
                'token': 'abc',
                'notification': {
                    'title': 'Hi',
                    'body': 'Bye',
                    'image': 'https://img/x.png',
                    'sound': 'notification.wav',
                    'color': '#FF0000',
                    'badge': '5',
                },
                'data': {'link': 'https://x'},
            }
        )
        self.assertEqual(sdk_message.notification.title, 'Hi')
        self.assertEqual(sdk_message.notification.body, 'Bye')
        self.assertEqual(sdk_message.notification.image, 'https://img/x.png')
        self.assertEqual(sdk_message.android.notification.sound, 'notification.wav')
        self.assertEqual(sdk_message.android.notification.color, '#FF0000')
        self.assertEqual(sdk_message.apns.payload.aps.badge, 5)
        self.assertEqual(sdk_message.data, {'link': 'https://x'})

    def test_empty_sections_are_omitted(self):
        sdk_message = to_sdk_message({'token': 'abc', 'notification': {}, 'data': {}})
        self.assertIsNone(sdk_message.notification)
        self.assertIsNone(sdk_message.data)

    def test_unknown_notification_field_rejected(self):
        with self.assertRaises(InvalidMessageRequest) as ctx:
            to_sdk_message({'token': 'abc', 'notification': {'title': 'Hi', 'userId': '1'}})
        self.assertIn('userId', ctx.exception.message)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_non_numeric_badge_rejected(self):
        with self.assertRaises(InvalidMessageRequest):
            to_sdk_message({'token': 'abc', 'notification': {'badge': 'many'}})


class FirebaseProviderTests(unittest.TestCase):
    @patch('fcm_tester.providers.firebase_provider.credentials.Certificate')
    @patch('fcm_tester.providers.firebase_provider.firebase_admin')
    def test_from_credential_replaces_stale_app(self, firebase_admin_mock, certificate_mock):
        stale = MagicMock(name='stale_app')
        firebase_admin_mock.get_app.return_value = stale
        firebase_admin_mock.initialize_app.return_value = MagicMock(name='app')

        provider = FirebaseProvider.from_credential(VALID_CREDENTIAL, app_name='fcm-tester', dry_run=True)

        firebase_admin_mock.delete_app.assert_called_once_with(stale)
        cert_arg = certificate_mock.call_args.args[0]
        self.assertIn('\n', cert_arg['private_key'])
        self.assertNotIn('\\n', cert_arg['private_key'])
        firebase_admin_mock.initialize_app.assert_called_once_with(
            certificate_mock.return_value,
            {'projectId': 'fcm-tester-demo'},
            name='fcm-tester',
        )
        self.assertIs(provider.app, firebase_admin_mock.initialize_app.return_value)
        self.assertTrue(provider.dry_run)

    @patch('fcm_tester.providers.firebase_provider.credentials.Certificate')
    @patch('fcm_tester.providers.firebase_provider.firebase_admin')
    def test_from_credential_without_existing_app(self, firebase_admin_mock, certificate_mock):
        firebase_admin_mock.get_app.side_effect = ValueError('no app')

        FirebaseProvider.from_credential(VALID_CREDENTIAL, app_name='fcm-tester')

        firebase_admin_mock.delete_app.assert_not_called()
        firebase_admin_mock.initialize_app.assert_called_once()

    @patch('fcm_tester.providers.firebase_provider.credentials.Certificate')
    @patch('fcm_tester.providers.firebase_provider.firebase_admin')
    def test_bad_key_material_is_initialization_error(self, firebase_admin_mock, certificate_mock):
        firebase_admin_mock.get_app.side_effect = ValueError('no app')
        certificate_mock.side_effect = ValueError('Failed to initialize a certificate credential.')

        with self.assertRaises(ProviderInitializationError) as ctx:
            FirebaseProvider.from_credential(VALID_CREDENTIAL, app_name='fcm-tester')

        self.assertIn('Failed to initialize a certificate credential', ctx.exception.message)
        firebase_admin_mock.initialize_app.assert_not_called()

    def test_send_calls_sdk_once(self):
        app = MagicMock(name='app')
        provider = FirebaseProvider(app, dry_run=True)
        with patch.object(messaging, 'send', return_value='projects/p/messages/1') as send_mock:
            message_id = provider.send({'token': 'abc', 'data': {'title': 'Hi'}})

        self.assertEqual(message_id, 'projects/p/messages/1')
        send_mock.assert_called_once()
        sdk_message = send_mock.call_args.args[0]
        self.assertEqual(sdk_message.token, 'abc')
        self.assertEqual(send_mock.call_args.kwargs, {'dry_run': True, 'app': app})

    def test_send_wraps_firebase_error(self):
        provider = FirebaseProvider(MagicMock(name='app'))
        error = messaging.UnregisteredError('Requested entity was not found.')
        with patch.object(messaging, 'send', side_effect=error):
            with self.assertRaises(ProviderSendError) as ctx:
                provider.send({'token': 'abc', 'data': {'title': 'Hi'}})

        self.assertEqual(ctx.exception.message, 'Requested entity was not found.')
        self.assertEqual(ctx.exception.code, 'registration-token-not-registered')

    def test_send_keeps_generic_not_found_code(self):
        provider = FirebaseProvider(MagicMock(name='app'))
        error = firebase_exceptions.NotFoundError('Requested entity was not found.')
        with patch.object(messaging, 'send', side_effect=error):
            with self.assertRaises(ProviderSendError) as ctx:
                provider.send({'token': 'abc', 'data': {'title': 'Hi'}})
        self.assertEqual(ctx.exception.code, 'NOT_FOUND')

    def test_send_wraps_sdk_value_error(self):
        provider = FirebaseProvider(MagicMock(name='app'))
        with patch.object(messaging, 'send', side_effect=ValueError('Message.token must be a non-empty string.')):
            with self.assertRaises(ProviderSendError) as ctx:
                provider.send({'token': 'abc'})
        self.assertIn('non-empty', ctx.exception.message)
        self.assertIsNone(ctx.exception.code)

    @patch('fcm_tester.providers.firebase_provider.firebase_admin')
    def test_close_deletes_app(self, firebase_admin_mock):
        app = MagicMock(name='app')
        FirebaseProvider(app).close()
        firebase_admin_mock.delete_app.assert_called_once_with(app)
