from __future__ import annotations

import logging

import pytest

from pubimport.config import ConfigurationError, InvalidSettingError, configure_logging
from pubimport.config.env import env_choice, env_float, env_int, optional_env_var


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", " x ")
    assert optional_env_var("EXAMPLE_VAR") == "x"


def test_numeric_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_NUMBER", raising=False)
    assert env_int("EXAMPLE_NUMBER", 5) == 5

    monkeypatch.setenv("EXAMPLE_NUMBER", "8")
    assert env_int("EXAMPLE_NUMBER", 5) == 8
    assert env_float("EXAMPLE_NUMBER", 1.5) == 8.0


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_numbers_raise(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("EXAMPLE_NUMBER", value)

    with pytest.raises(ConfigurationError, match="EXAMPLE_NUMBER"):
        env_int("EXAMPLE_NUMBER", 5)


def test_invalid_setting_error_keeps_name_and_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_NUMBER", "many")

    with pytest.raises(InvalidSettingError) as exc:
        env_float("EXAMPLE_NUMBER", 1.0)

    assert exc.value.name == "EXAMPLE_NUMBER"
    assert exc.value.value == "many"
    assert str(exc.value) == "EXAMPLE_NUMBER must be a number, got 'many'"


def test_env_choice(monkeypatch: pytest.MonkeyPatch) -> None:
    choices = {"memory", "sqlite"}
    monkeypatch.delenv("EXAMPLE_CHOICE", raising=False)
    assert env_choice("EXAMPLE_CHOICE", choices, "memory") == "memory"

    monkeypatch.setenv("EXAMPLE_CHOICE", " SQLite ")
    assert env_choice("EXAMPLE_CHOICE", choices, "memory") == "sqlite"

    monkeypatch.setenv("EXAMPLE_CHOICE", "redis")
    with pytest.raises(InvalidSettingError, match="one of memory, sqlite"):
        env_choice("EXAMPLE_CHOICE", choices, "memory")


def test_configure_logging_reads_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUBIMPORT_LOG_LEVEL", "debug")

    level = configure_logging(force=True)

    assert level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_explicit_level_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PUBIMPORT_LOG_LEVEL", "verbose")

    assert configure_logging(level=logging.ERROR, force=True) == logging.ERROR
    assert logging.getLogger("httpx").level == logging.ERROR

    with pytest.raises(InvalidSettingError, match="PUBIMPORT_LOG_LEVEL"):
        configure_logging(force=True)
