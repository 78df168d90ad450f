"""
Applying stored identities to git.
"""

import logging

from .git_config import GitConfig, Scope
from .identity import IdentityRecord, TagNotUsableError

logger = logging.getLogger(__name__)


class IdentitySwitcher:
    """Pushes identities from an IdentityStore into git's configuration."""

    def __init__(self, store, git_config=None):
        self.store = store
        self.git_config = git_config or GitConfig()

    def current_identity(self):
        """Get the identity git currently resolves to."""
        return IdentityRecord(
            name=self.git_config.query("user.name"),
            email=self.git_config.query("user.email"),
        )

    def switch(self, tag, scope=Scope.GLOBAL):
        """
        Make the identity stored under tag the active one at scope.

        Raises TagNotUsableError when the tag is missing or has no email.
        GitConfigError from git is passed through; an email that was already
        written is not reverted.
        """
        record = self.store.lookup(tag)
        if record is None:
            raise TagNotUsableError(tag)

        logger.debug("Switching %s identity to tag %s", scope.value, tag)
        self.git_config.set("user.email", record.email, scope)
        # An empty name leaves whatever git already has
        if record.name:
            self.git_config.set("user.name", record.name, scope)
        return record

    def describe_current(self):
        """Format the current git identity for display."""
        current = self.current_identity()
        return f"Name:   {current.name}\nE-mail: {current.email}"
