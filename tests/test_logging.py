import logging

from ensek_check.runtime.logging import LOGGER_NAMESPACE, get_logger, parse_log_level, set_log_level


def test_get_logger_uses_package_namespace() -> None:
    assert get_logger("ensek_check.client.ensek_client").name == "ensek_check.client.ensek_client"
    assert get_logger("tests.helpers").name == f"{LOGGER_NAMESPACE}.tests.helpers"


def test_parse_log_level() -> None:
    assert parse_log_level("debug") == logging.DEBUG
    assert parse_log_level("WARN") == logging.WARNING
    assert parse_log_level("nonsense") == logging.INFO
    assert parse_log_level(None) == logging.INFO


def test_set_log_level_changes_namespace_level() -> None:
    logger = logging.getLogger(LOGGER_NAMESPACE)
    previous = logger.level
    try:
        set_log_level(logging.WARNING)
        assert logger.level == logging.WARNING
    finally:
        set_log_level(previous)
