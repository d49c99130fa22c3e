import logging

from fruit_api.core.logging.builder import make_dict_config, setup_logging

from ..test_fixtures.settings_fixtures import make_settings


def test_make_dict_config_file_handlers_when_not_stdout(tmp_path):
    settings = make_settings(tmp_path, LOG_TO_STDOUT=False, LOG_FORMAT="json")

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"].endswith("app.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert cfg["handlers"]["console"]["formatter"] == "json"


def test_make_dict_config_stdout_only(tmp_path):
    settings = make_settings(tmp_path, LOG_TO_STDOUT=True, LOG_FORMAT="text")

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "standard"


def test_sql_logging_is_opt_in(tmp_path):
    quiet = make_dict_config(make_settings(tmp_path))
    loud = make_dict_config(make_settings(tmp_path, ENABLE_SQL_LOGGING=True))

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path):
    settings = make_settings(tmp_path, LOG_TO_STDOUT=False, LOG_DIR=tmp_path / "logs")
    assert not settings.LOG_DIR.exists()

    setup_logging(settings)

    assert settings.LOG_DIR.exists()
    assert logging.getLogger().handlers
