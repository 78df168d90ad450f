#!/usr/bin/env python3
"""
Command-line interface for gitswitch.
"""

import argparse
import logging
import sys

import colorama

from . import __version__
from .display import (display_current, display_error, display_identities,
                      display_notice, display_success)
from .git_config import GitConfig, Scope
from .identity import DEFAULT_TAG, GitSwitchError, IdentityStore, LoadError
from .switcher import IdentitySwitcher

# Initialize colorama for cross-platform colored terminal output
colorama.init()

logger = logging.getLogger(__name__)


def build_parser():
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="gitswitch",
        description="Switch between the git identities you use.",
    )

    commands = parser.add_mutually_exclusive_group()
    commands.add_argument(
        "-l", "--list", action="store_true",
        help="Show all git users you have configured",
    )
    commands.add_argument(
        "-i", "--info", action="store_true",
        help="Show the current git user info",
    )
    commands.add_argument(
        "-s", "--switch", nargs="?", const=DEFAULT_TAG, metavar="TAG",
        help="Switch the global git user to the specified tag (default: %(const)s)",
    )
    commands.add_argument(
        "-r", "--repo", nargs="?", const=DEFAULT_TAG, metavar="TAG",
        help="Switch the git user for the current repository to the specified tag "
             "(default: %(const)s)",
    )
    commands.add_argument(
        "-a", "--add", action="store_true",
        help="Add a new identity entry",
    )
    commands.add_argument(
        "-o", "--overwrite", action="store_true",
        help="Overwrite/create the default entry using your current git user info",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"gitswitch {__version__}",
        help="Show the current version",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Show debug information about git calls and the identity file",
    )

    return parser


def read_line(prompt):
    """Read one line of input, treating end of input as an empty answer."""
    try:
        return input(prompt).strip()
    except EOFError:
        return ""


def confirm(question):
    """Ask a yes/no question; anything starting with y counts as yes."""
    return read_line(f"{question} (y/n): ").lower().startswith("y")


def prompt_new_entry(current_name):
    """Collect the tag, email and name for a new entry from the user."""
    tag = read_line("What tag would you like to set to this git user? ")
    email = read_line("E-mail address: ")
    name = read_line(f'Name: (ENTER to use "{current_name}") ')
    if not name:
        name = current_name
    return tag, email, name


def bootstrap_store(store, switcher):
    """Offer to create the identity file from the current git user."""
    question = (
        f"Identity file {store.path} not found.  Would you like to create one?"
    )
    if not confirm(question):
        print("Ok, that's fine.  Exiting.")
        return False

    print(f'Adding your current git user info to the "{DEFAULT_TAG}" tag...')
    store.initialize_from(switcher.current_identity())
    return True


def handle_list(store, switcher):
    display_identities(
        store.list(), store_path=store.path, active=switcher.current_identity()
    )


def handle_info(store, switcher):
    display_current(switcher.describe_current())


def handle_switch(store, switcher, tag, scope):
    """Switch to a tag and show the resulting identity."""
    where = "for this repository" if scope is Scope.REPOSITORY else "globally"
    print(f'Switching git user to "{tag}" tag {where}...')
    switcher.switch(tag, scope)
    display_success(f'Now using "{tag}".')
    display_current(switcher.describe_current())


def handle_add(store, switcher):
    """Interactively add or replace an entry."""
    tag, email, name = prompt_new_entry(switcher.current_identity().name)
    if not tag:
        display_error("A tag is required.")
        return False

    replacing = tag in store.entries
    store.set_entry(tag, email, name)
    verb = "Updated" if replacing else "Added"
    display_success(f'{verb} "{tag}": {name} <{email}>')
    if not email:
        display_notice(f'"{tag}" has no e-mail and cannot be switched to until one is set.')
    return True


def handle_overwrite(store, switcher):
    """Seed the default entry from git's current user."""
    if not store.exists():
        # Creating the file still needs the user's go-ahead
        if bootstrap_store(store, switcher):
            display_current(switcher.describe_current())
        return

    print(f'Adding your current git user info to the "{DEFAULT_TAG}" tag...')
    store.reset_default(switcher.current_identity())
    display_current(switcher.describe_current())


def run(args, parser, store, switcher):
    """Run the selected command; return False if it did not complete."""
    # Nothing requested: show where things stand and how to change them
    if not any((args.list, args.info, args.switch is not None,
                args.repo is not None, args.add, args.overwrite)):
        handle_info(store, switcher)
        parser.print_help()
        return True

    if args.overwrite:
        handle_overwrite(store, switcher)
        return True

    if not store.exists() and not bootstrap_store(store, switcher):
        return True

    if args.list:
        handle_list(store, switcher)
    elif args.info:
        handle_info(store, switcher)
    elif args.switch is not None:
        handle_switch(store, switcher, args.switch, Scope.GLOBAL)
    elif args.repo is not None:
        handle_switch(store, switcher, args.repo, Scope.REPOSITORY)
    elif args.add:
        return handle_add(store, switcher)
    return True


def main(argv=None):
    """Main function to run the script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = IdentityStore()
    try:
        store.load()
    except LoadError as e:
        # A broken file must never be replaced by a guessed mapping
        display_error(str(e))
        sys.exit(1)

    switcher = IdentitySwitcher(store, GitConfig())

    try:
        completed = run(args, parser, store, switcher)
    except GitSwitchError as e:
        logger.debug("Command failed", exc_info=True)
        display_error(str(e))
        sys.exit(1)

    if not completed:
        sys.exit(1)


if __name__ == "__main__":
    main()
