from fcm_tester.providers.base import BaseProvider
from fcm_tester.providers.firebase_provider import FirebaseProvider
from fcm_tester.providers.handle import ProviderHandle

__all__ = ['BaseProvider', 'FirebaseProvider', 'ProviderHandle']
