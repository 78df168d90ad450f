"""
Reading and writing git's user configuration.
"""

import enum
import logging
import os

# Report a missing git binary when a command runs, not at import time
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import git  # noqa: E402

from .identity import GitSwitchError

logger = logging.getLogger(__name__)


class Scope(enum.Enum):
    GLOBAL = "global"
    REPOSITORY = "repository"


class GitConfigError(GitSwitchError):
    """A git config command could not be carried out."""


def _command_error_text(error):
    """Pull the most useful message out of a GitPython command error."""
    stderr = getattr(error, "stderr", "") or ""
    # GitPython wraps stderr as "\n  stderr: '...'"
    stderr = stderr.strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()
    return stderr or str(error)


class GitConfig:
    """
    Narrow wrapper around `git config` for user.name and user.email.

    Commands run in repo_path (the current directory by default) so that git
    applies its own global/repository precedence on reads.
    """

    def __init__(self, repo_path=None):
        if repo_path is None:
            try:
                repo_path = os.getcwd()
            except FileNotFoundError:
                # The working directory was removed out from under us
                logger.debug("Current directory no longer exists")
        self.repo_path = repo_path

    def query(self, key):
        """Get a config value, or an empty string if git has none."""
        try:
            value = git.Git(self.repo_path).config("--get", key)
        except git.exc.CommandError as e:
            # Exit status 1 just means the key is unset
            logger.debug("git config --get %s failed: %s", key, e)
            return ""
        return value.strip()

    def _repo_git(self):
        """Get a git command runner bound to the enclosing repository."""
        if self.repo_path is None:
            raise GitConfigError("The current directory no longer exists.")
        try:
            repo = git.Repo(self.repo_path, search_parent_directories=True)
        except git.exc.InvalidGitRepositoryError as e:
            raise GitConfigError(
                f"{self.repo_path} is not inside a git repository."
            ) from e
        except git.exc.NoSuchPathError as e:
            raise GitConfigError(f"Path {self.repo_path} does not exist.") from e
        return repo.git

    def set(self, key, value, scope):
        """Set a config value at the given scope."""
        if scope is Scope.GLOBAL:
            runner = git.Git(self.repo_path)
            args = ("--global", "--replace-all", key, value)
        else:
            runner = self._repo_git()
            args = ("--local", "--replace-all", key, value)

        logger.debug("git config %s", " ".join(args))
        try:
            runner.config(*args)
        except git.exc.CommandError as e:
            raise GitConfigError(
                f"Failed to set {key} ({scope.value}): {_command_error_text(e)}"
            ) from e
