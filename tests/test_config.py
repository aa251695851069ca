"""Tests for environment-driven settings."""

import pytest

from karta_backend.core.config import TEAM_DELETE_POLICIES, env_choice, env_flag


def test_env_choice_accepts_known_values(monkeypatch):
    monkeypatch.setenv("KARTA_TEAM_DELETE_POLICY", " Cascade ")

    assert env_choice("KARTA_TEAM_DELETE_POLICY", "keep_history", TEAM_DELETE_POLICIES) == "cascade"


def test_env_choice_falls_back_to_default(monkeypatch):
    monkeypatch.delenv("KARTA_TEAM_DELETE_POLICY", raising=False)

    assert env_choice("KARTA_TEAM_DELETE_POLICY", "keep_history", TEAM_DELETE_POLICIES) == "keep_history"


def test_env_choice_rejects_unknown_values(monkeypatch):
    monkeypatch.setenv("KARTA_TEAM_DELETE_POLICY", "archive")

    with pytest.raises(ValueError, match="keep_history, reject_if_referenced, cascade"):
        env_choice("KARTA_TEAM_DELETE_POLICY", "keep_history", TEAM_DELETE_POLICIES)


@pytest.mark.parametrize("raw, expected", [("1", True), ("TRUE", True), ("yes", True), ("false", False), ("", False)])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("KARTA_SQL_ECHO", raw)

    assert env_flag("KARTA_SQL_ECHO") is expected
