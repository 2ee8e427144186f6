"""
Shared pytest fixtures for cvrdt tests.
"""

import logging

import pytest

from cvrdt.laws import LawConfig


def _reset_cvrdt_logger() -> None:
    logger = logging.getLogger("cvrdt")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_cvrdt_logging():
    """Give every test the library's default, silent logging setup."""
    _reset_cvrdt_logger()
    yield
    _reset_cvrdt_logger()


@pytest.fixture
def law_config() -> LawConfig:
    """Deterministic law-checking config; CVRDT_LAW_TRIALS raises the trial count."""
    return LawConfig.from_env(seed=20240917)
