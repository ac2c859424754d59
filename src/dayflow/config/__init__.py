import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; development is the default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "dayflow.config.production"

    if env in {"test", "testing"}:
        return "dayflow.config.testing"

    return "dayflow.config.development"
