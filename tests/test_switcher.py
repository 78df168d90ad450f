"""Tests for gitswitch/switcher.py"""

import pytest

from gitswitch.git_config import GitConfigError, Scope
from gitswitch.identity import (DEFAULT_TAG, IdentityRecord, IdentityStore,
                                TagNotUsableError)
from gitswitch.switcher import IdentitySwitcher

from .conftest import FakeGitConfig


class TestCurrentIdentity:
    def test_reads_name_and_email(self, store, fake_git):
        switcher = IdentitySwitcher(store, fake_git)
        assert switcher.current_identity() == IdentityRecord("Alice", "alice@x.com")

    def test_unset_values_are_empty(self, store):
        switcher = IdentitySwitcher(store, FakeGitConfig())
        assert switcher.current_identity() == IdentityRecord("", "")

    def test_describe_current(self, store, fake_git):
        text = IdentitySwitcher(store, fake_git).describe_current()
        assert text == "Name:   Alice\nE-mail: alice@x.com"

    def test_describe_current_with_nothing_set(self, store):
        text = IdentitySwitcher(store, FakeGitConfig()).describe_current()
        assert text == "Name:   \nE-mail: "


class TestSwitch:
    def test_sets_email_and_name(self, store, fake_git):
        store.set_entry("work", "alice@corp.example", "Alice Smith")

        record = IdentitySwitcher(store, fake_git).switch("work", Scope.GLOBAL)

        assert record == IdentityRecord("Alice Smith", "alice@corp.example")
        assert fake_git.calls == [
            ("user.email", "alice@corp.example", Scope.GLOBAL),
            ("user.name", "Alice Smith", Scope.GLOBAL),
        ]

    def test_empty_name_is_not_written(self, store, fake_git):
        store.set_entry("t", "t@x.com", "")

        IdentitySwitcher(store, fake_git).switch("t", Scope.GLOBAL)

        assert fake_git.calls == [("user.email", "t@x.com", Scope.GLOBAL)]
        assert fake_git.values["user.name"] == "Alice"

    def test_repository_scope_is_passed_through(self, store, fake_git):
        store.set_entry("work", "w@x.com", "W")

        IdentitySwitcher(store, fake_git).switch("work", Scope.REPOSITORY)

        assert {scope for _, _, scope in fake_git.calls} == {Scope.REPOSITORY}

    def test_missing_tag(self, store, fake_git):
        with pytest.raises(TagNotUsableError) as excinfo:
            IdentitySwitcher(store, fake_git).switch("nope", Scope.GLOBAL)

        assert excinfo.value.tag == "nope"
        assert "nope" in str(excinfo.value)
        assert fake_git.calls == []

    def test_tag_without_email(self, store, fake_git):
        store.set_entry("draft", "", "Draft")

        with pytest.raises(TagNotUsableError):
            IdentitySwitcher(store, fake_git).switch("draft", Scope.REPOSITORY)
        assert fake_git.calls == []

    def test_git_failure_propagates_without_rollback(self, store, fake_git):
        store.set_entry("work", "w@x.com", "W")
        fake_git.fail_on.add("user.name")

        with pytest.raises(GitConfigError):
            IdentitySwitcher(store, fake_git).switch("work", Scope.GLOBAL)

        assert fake_git.values["user.email"] == "w@x.com"


class TestBootstrapScenario:
    def test_seed_then_switch_repository(self, store_file, fake_git):
        store = IdentityStore(str(store_file))
        switcher = IdentitySwitcher(store, fake_git)
        assert not store.exists()

        store.initialize_from(switcher.current_identity())

        reloaded = IdentityStore.open(str(store_file))
        assert reloaded.entries == {
            DEFAULT_TAG: IdentityRecord("Alice", "alice@x.com")
        }

        repo_git = FakeGitConfig()
        IdentitySwitcher(reloaded, repo_git).switch(DEFAULT_TAG, Scope.REPOSITORY)

        assert repo_git.calls == [
            ("user.email", "alice@x.com", Scope.REPOSITORY),
            ("user.name", "Alice", Scope.REPOSITORY),
        ]
