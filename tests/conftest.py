"""Shared test fixtures."""

import pytest

from gitswitch.git_config import GitConfigError
from gitswitch.identity import IdentityStore


class FakeGitConfig:
    """Stands in for GitConfig, recording every set call."""

    def __init__(self, name="", email=""):
        self.values = {"user.name": name, "user.email": email}
        self.calls = []
        self.fail_on = set()

    def query(self, key):
        return self.values.get(key, "")

    def set(self, key, value, scope):
        if key in self.fail_on:
            raise GitConfigError(f"Failed to set {key} ({scope.value}): boom")
        self.calls.append((key, value, scope))
        self.values[key] = value


@pytest.fixture
def store_file(tmp_path, monkeypatch):
    """Point the identity file at a temporary location."""
    path = tmp_path / "config" / "gitswitch" / "identities.json"
    monkeypatch.setenv("GITSWITCH_FILE", str(path))
    return path


@pytest.fixture
def store(store_file):
    return IdentityStore(str(store_file))


@pytest.fixture
def fake_git():
    return FakeGitConfig(name="Alice", email="alice@x.com")
