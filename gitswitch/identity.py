"""
Identity store: the persisted mapping from tag to git identity.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"


class GitSwitchError(Exception):
    """Base class for every error gitswitch reports to the user."""


class LoadError(GitSwitchError):
    """The identity file exists but does not hold a valid mapping."""

    def __init__(self, path, reason):
        super().__init__(f"Failed to load identity file {path}: {reason}")
        self.path = path
        self.reason = reason


class PersistError(GitSwitchError):
    """The identity file could not be written."""

    def __init__(self, path, reason):
        super().__init__(f"Could not write the identity file {path}: {reason}")
        self.path = path
        self.reason = reason


class EmptyIdentityError(GitSwitchError):
    """Seeding was requested from an identity with neither name nor email."""

    def __init__(self):
        super().__init__(
            "You must set up a default git user.name and user.email first."
        )


class TagNotUsableError(GitSwitchError):
    """The tag is missing from the store or has no email."""

    def __init__(self, tag):
        super().__init__(f"Could not find info for tag '{tag}' in your identity file")
        self.tag = tag


@dataclass(frozen=True)
class IdentityRecord:
    """A git authorship identity. Either field may be empty."""

    name: str = ""
    email: str = ""

    @property
    def usable(self):
        # Entries without an email cannot be switched to
        return bool(self.email)

    @property
    def is_empty(self):
        return not self.name and not self.email

    def to_dict(self):
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data):
        """Build a record from its serialized form, rejecting anything malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        if set(data) != {"name", "email"}:
            raise ValueError(
                f"expected exactly the keys 'name' and 'email', got {sorted(data)}"
            )
        for field in ("name", "email"):
            if not isinstance(data[field], str):
                raise ValueError(f"'{field}' must be a string")
        return cls(name=data["name"], email=data["email"])


def get_config_dir():
    """Get the directory for storing configuration files."""
    # Use XDG_CONFIG_HOME if available, otherwise use ~/.config
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(config_home, "gitswitch")


def get_store_file():
    """Get the path to the identity file."""
    # An explicit override wins over the XDG location
    override = os.environ.get("GITSWITCH_FILE")
    if override:
        return os.path.expanduser(override)
    return os.path.join(get_config_dir(), "identities.json")


class IdentityStore:
    """
    Tag to IdentityRecord mapping backed by a JSON file.

    Every mutation rewrites the whole file. Nothing here prompts or prints;
    the caller decides whether a missing file should be created.
    """

    def __init__(self, path=None, entries=None):
        self.path = path or get_store_file()
        self.entries = dict(entries or {})

    @classmethod
    def open(cls, path=None):
        """Create a store and load it from disk if the file is present."""
        store = cls(path)
        store.load()
        return store

    def exists(self):
        return os.path.exists(self.path)

    def load(self):
        """Replace the in-memory mapping with the file's content."""
        if not self.exists():
            logger.debug("No identity file at %s", self.path)
            self.entries = {}
            return self.entries

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LoadError(self.path, str(e)) from e
        except OSError as e:
            raise LoadError(self.path, e.strerror or str(e)) from e

        if not isinstance(raw, dict):
            raise LoadError(self.path, "top level must be an object of tags")

        # Build the new mapping fully before swapping it in
        entries = {}
        for tag, data in raw.items():
            if not tag:
                raise LoadError(self.path, "empty tag")
            try:
                entries[tag] = IdentityRecord.from_dict(data)
            except ValueError as e:
                raise LoadError(self.path, f"tag '{tag}': {e}") from e

        self.entries = entries
        logger.debug("Loaded %d identities from %s", len(entries), self.path)
        return self.entries

    def persist(self, entries=None):
        """Write the full mapping to disk, replacing the previous content."""
        if entries is not None:
            self.entries = dict(entries)

        payload = {tag: record.to_dict() for tag, record in self.entries.items()}
        parent = os.path.dirname(self.path) or "."
        tmp_path = None
        try:
            os.makedirs(parent, exist_ok=True)
            # Written beside the target, then renamed over it
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=parent, prefix=".identities-",
                suffix=".tmp", delete=False,
            ) as f:
                tmp_path = f.name
                json.dump(payload, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistError(self.path, e.strerror or str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug("Saved %d identities to %s", len(payload), self.path)

    def set_entry(self, tag, email, name):
        """Insert or overwrite the identity for a tag and save."""
        self.entries[tag] = IdentityRecord(name=name, email=email)
        self.persist()
        return self.entries

    def initialize_from(self, identity):
        """Start a fresh store holding only the given identity as the default."""
        if identity.is_empty:
            raise EmptyIdentityError()

        self.entries = {DEFAULT_TAG: IdentityRecord(identity.name, identity.email)}
        self.persist()
        return self.entries

    def reset_default(self, identity):
        """Overwrite the default tag from the given identity, keeping other tags."""
        if identity.is_empty:
            raise EmptyIdentityError()

        return self.set_entry(DEFAULT_TAG, identity.email, identity.name)

    def list(self):
        """Snapshot of (tag, record) pairs, sorted by tag."""
        return sorted(self.entries.items())

    def lookup(self, tag):
        """Get the record for a tag, or None if it is missing or has no email."""
        record = self.entries.get(tag)
        if record is None or not record.usable:
            return None
        return record
