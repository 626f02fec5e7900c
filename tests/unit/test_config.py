"""
Unit tests for configuration, the CLI argument layer and logging setup.
"""

import logging

import pytest

from httplistener.__main__ import build_parser, config_from_args, main
from httplistener.config import ListenerConfig
from httplistener.log import PACKAGE_LOGGER, configure_logging


ENV_VARS = (
    "HTTP_HOST",
    "HTTP_PORT",
    "HTTP_BUFFER_SIZE",
    "HTTP_READ_TIMEOUT",
    "HTTP_MAX_BUFFER_SIZE",
    "HTTP_LOG_LEVEL",
    "HTTP_LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every listener environment variable."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestListenerConfig:
    """Tests for ListenerConfig defaults and validation."""

    def test_defaults(self):
        config = ListenerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.buffer_size == 512
        assert config.read_timeout is None
        assert config.max_buffer_size == 1024 * 1024
        assert config.log_file is None

    def test_defaults_are_valid(self):
        ListenerConfig().validate()

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"buffer_size": 0},
        {"read_timeout": 0},
        {"read_timeout": -2.5},
        {"buffer_size": 1024, "max_buffer_size": 512},
        {"log_level": "VERBOSE"},
    ])
    def test_invalid_values(self, overrides: dict):
        with pytest.raises(ValueError):
            ListenerConfig(**overrides).validate()

    @pytest.mark.parametrize("overrides", [
        {"port": 0},
        {"max_buffer_size": None},
        {"read_timeout": 0.5},
        {"log_level": "debug"},
    ])
    def test_valid_values(self, overrides: dict):
        ListenerConfig(**overrides).validate()


class TestFromEnv:
    """Tests for ListenerConfig.from_env()."""

    def test_no_environment(self, clean_env):
        assert ListenerConfig.from_env() == ListenerConfig()

    def test_reads_environment(self, clean_env):
        clean_env.setenv("HTTP_HOST", "0.0.0.0")
        clean_env.setenv("HTTP_PORT", "3000")
        clean_env.setenv("HTTP_BUFFER_SIZE", "1024")
        clean_env.setenv("HTTP_READ_TIMEOUT", "2.5")
        clean_env.setenv("HTTP_LOG_LEVEL", "DEBUG")
        clean_env.setenv("HTTP_LOG_FILE", "listener.log")

        config = ListenerConfig.from_env()

        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.buffer_size == 1024
        assert config.read_timeout == 2.5
        assert config.log_level == "DEBUG"
        assert config.log_file == "listener.log"

    def test_zero_buffer_cap_means_unlimited(self, clean_env):
        clean_env.setenv("HTTP_MAX_BUFFER_SIZE", "0")
        assert ListenerConfig.from_env().max_buffer_size is None

    def test_malformed_number(self, clean_env):
        clean_env.setenv("HTTP_PORT", "eighty")

        with pytest.raises(ValueError):
            ListenerConfig.from_env()


class TestCLI:
    """Tests for argument parsing."""

    def test_no_arguments_uses_environment(self, clean_env):
        clean_env.setenv("HTTP_PORT", "9000")
        config = config_from_args(build_parser().parse_args([]))

        assert config.port == 9000

    def test_arguments_override_environment(self, clean_env):
        clean_env.setenv("HTTP_PORT", "9000")
        args = build_parser().parse_args([
            "--port", "3000",
            "-H", "0.0.0.0",
            "--buffer-size", "64",
            "--read-timeout", "1.5",
            "--log-level", "DEBUG",
            "--log-file", "out.log",
        ])
        config = config_from_args(args)

        assert config.port == 3000
        assert config.host == "0.0.0.0"
        assert config.buffer_size == 64
        assert config.read_timeout == 1.5
        assert config.log_level == "DEBUG"
        assert config.log_file == "out.log"

    def test_zero_max_buffer_size_means_unlimited(self, clean_env):
        args = build_parser().parse_args(["--max-buffer-size", "0"])
        assert config_from_args(args).max_buffer_size is None

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])

    def test_invalid_config_exit_code(self, clean_env, capsys):
        assert main(["--port", "70000"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_package_logger(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        level, handlers = logger.level, list(logger.handlers)
        yield
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)

    def test_sets_package_level(self):
        logger = configure_logging("DEBUG")

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG

    def test_file_format(self, tmp_path):
        log_file = tmp_path / "listener.log"
        logger = configure_logging("INFO", str(log_file))

        logging.getLogger("httplistener.server").info("Read 0 bytes. Closing socket.")
        for handler in logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip()
        assert line.startswith("(")
        assert line.endswith(") [INFO]: Read 0 bytes. Closing socket.")

    def test_file_handler_not_duplicated(self, tmp_path):
        configure_logging("INFO", str(tmp_path / "a.log"))
        logger = configure_logging("INFO", str(tmp_path / "b.log"))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename.endswith("b.log")
