import logging

from uta.logging_setup import setup_logging


def test_urllib3_quiet_by_default(monkeypatch):
    monkeypatch.delenv("UTA_LOG_LEVEL", raising=False)
    setup_logging(False)
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_urllib3_verbose_with_debug(monkeypatch):
    monkeypatch.delenv("UTA_LOG_LEVEL", raising=False)
    setup_logging(True)
    assert logging.getLogger("urllib3").level == logging.DEBUG


def test_env_level_applies_to_urllib3(monkeypatch):
    monkeypatch.setenv("UTA_LOG_LEVEL", "debug")
    setup_logging(False)
    assert logging.getLogger("urllib3").level == logging.DEBUG
