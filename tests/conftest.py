import logging

import pytest
import structlog

from formcheck.validation import Validation


@pytest.fixture(autouse=True)
def _restore_logging():
    """configure_logging() rewires the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def session() -> Validation:
    return Validation()


@pytest.fixture
def post() -> dict:
    return {
        "id": "100",
        "name": "",
        "datum": "1980-06-15 00:00",
        "age": "15",
    }


@pytest.fixture
def signup_yaml() -> str:
    return r"""
fields:
  - field: id
    rules:
      - {rule: required, message: Please enter an ID.}
      - {rule: 'match||[1-9]\d{3}', message: Please enter a valid ID.}
  - field: name
    rules:
      - {rule: required, message: Please enter a name.}
  - field: age
    rules:
      - {rule: required, message: Please enter an age.}
      - {rule: 'min||16', message: You must be 16 or older.}
"""
