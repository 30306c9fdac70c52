"""FCM Tester: check a Firebase service account and relay test push messages."""

__version__ = '0.1.0'
__all__ = ['app']


def __getattr__(name: str):
    if name == 'app':
        from .main import app

        return app
    raise AttributeError(name)
