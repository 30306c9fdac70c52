from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    app_name: str = 'FCM Tester'
    app_env: str = 'local'
    app_base_url: str = 'http://127.0.0.1:8000'
    # Full service account JSON on a single line, private_key newlines escaped as \n.
    firebase_service_account_key: str = ''
    firebase_app_name: str = 'fcm-tester'
    fcm_dry_run: bool = False
    form_variant: str = 'full'
    form_features: str = ''
    metrics_slow_ms: int = 200


settings = Settings()
