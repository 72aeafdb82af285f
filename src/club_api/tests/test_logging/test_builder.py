import logging

from club_api.core.logging.builder import make_dict_config, setup_logging
from club_api.core.logging.formatters import ColorFormatter

from ..test_fixtures.database import make_test_settings


class TestMakeDictConfig:

    def test_stdout_uses_console_handlers(self):
        config = make_dict_config(make_test_settings(LOG_TO_STDOUT=True))

        assert set(config["handlers"]) == {"console", "error_console"}
        assert config["loggers"][""]["handlers"] == ["console", "error_console"]

    def test_file_logging_when_stdout_disabled(self, tmp_path):
        config = make_dict_config(make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))

        assert set(config["handlers"]) == {"console", "file", "error_file"}
        assert config["handlers"]["file"]["filename"] == str(tmp_path / "club-api.log")
        assert config["handlers"]["error_file"]["formatter"] == "json"

    def test_text_format_uses_color_formatter(self):
        config = make_dict_config(make_test_settings(LOG_FORMAT="text"))

        assert config["formatters"]["standard"]["()"] is ColorFormatter
        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_sql_logging_level(self):
        quiet = make_dict_config(make_test_settings(ENABLE_SQL_LOGGING=False))
        loud = make_dict_config(make_test_settings(ENABLE_SQL_LOGGING=True))

        assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
        assert loud["loggers"]["sqlalchemy.engine"]["level"] == "INFO"

    def test_every_handler_runs_both_filters(self, tmp_path):
        config = make_dict_config(make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))

        for handler in config["handlers"].values():
            assert handler["filters"] == ["request_id", "redact"]


class TestSetupLogging:

    def test_creates_log_dir_and_writes_file(self, tmp_path, test_settings):
        log_dir = tmp_path / "logs"
        try:
            setup_logging(make_test_settings(LOG_TO_STDOUT=False, LOG_DIR=log_dir, LOG_LEVEL="INFO"))
            logging.getLogger("club_api.test").info("service.sport.created", extra={"sport_id": 1})
            for handler in logging.getLogger().handlers:
                handler.flush()
        finally:
            setup_logging(test_settings)

        assert "service.sport.created" in (log_dir / "club-api.log").read_text(encoding="utf-8")
