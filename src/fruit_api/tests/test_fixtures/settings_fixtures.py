"""Settings helpers shared by conftest.py and tests that need their own Settings."""

from fruit_api.config.settings import Settings


def make_settings(tmp_path, **overrides) -> Settings:
    """
    Settings for a throwaway SQLite database in `tmp_path`. Keyword arguments
    win over the environment and any .env file.
    """
    values = {
        "ENV": "testing",
        "TESTING": True,
        "DB_URL": f"sqlite+aiosqlite:///{tmp_path / 'fruits.db'}",
        "DB_CREATE_SCHEMA": True,
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "text",
        "LOG_TO_STDOUT": True,
        "LOG_DIR": tmp_path / "logs",
        "LOG_USE_QUEUE": False,
    }
    values.update(overrides)
    return Settings(**values)
