# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures for the VPS initializer tests
"""

import pytest

from persistor import SecurePersistor
from settings import Settings
from token_validator import ValidationResult


class ScriptedPrompter:
    """Prompter that replays canned answers and records every question."""

    def __init__(self, secrets=(), yes_no=(), choices=()):
        self.secrets = list(secrets)
        self.yes_no = list(yes_no)
        self.choices = list(choices)
        self.asked = []
        self.shown = []

    def ask_secret(self, message):
        self.asked.append(("secret", message))
        assert self.secrets, f"unexpected secret prompt: {message}"
        return self.secrets.pop(0)

    def ask_yes_no(self, message, default=False):
        self.asked.append(("yes_no", message))
        assert self.yes_no, f"unexpected confirmation prompt: {message}"
        return self.yes_no.pop(0)

    def choose(self, message, choices):
        self.asked.append(("choose", message))
        assert self.choices, f"unexpected choice prompt: {message}"
        return self.choices.pop(0)

    def show_text(self, text):
        self.shown.append(text)

    def count(self, kind):
        return sum(1 for k, _ in self.asked if k == kind)


class FakeValidator:
    """Accepts exactly the tokens in ``valid``; answers 401 otherwise."""

    def __init__(self, valid=()):
        self.valid = set(valid)
        self.calls = []

    def validate(self, credential):
        self.calls.append(credential.value)
        if credential.value in self.valid:
            return ValidationResult(valid=True, status=200)
        return ValidationResult(valid=False, status=401)


@pytest.fixture
def settings(tmp_path):
    """Settings with every directory inside tmp_path"""
    return Settings(
        raw_base_url="http://127.0.0.1:1/repo/main",
        work_dir=tmp_path / "tmp",
        token_dir=tmp_path / "srv" / "tokens",
        script_dir=tmp_path / "srv" / "scripts",
        welcome_script=tmp_path / "etc" / "kubu-vps-startup.sh",
        hostname="testhost",
        timeout=2.0,
        retry_backoff=0.0,
    )


@pytest.fixture
def workdirs(settings, tmp_path, monkeypatch):
    """Create the scratch dir and a separate cwd"""
    settings.work_dir.mkdir(parents=True)
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def persistor(settings):
    return SecurePersistor(settings.scratch_token_path, settings.durable_token_path)


@pytest.fixture
def make_prompter():
    return ScriptedPrompter


@pytest.fixture
def make_validator():
    return FakeValidator
