"""
Display functionality for stored and current git identities.
"""

from colorama import Fore, Style
from tabulate import tabulate


def format_email(record):
    """Return the email, flagged when the record cannot be switched to."""
    if record.usable:
        return record.email
    return f"{Fore.YELLOW}(no email){Style.RESET_ALL}"


def display_identities(entries, store_path=None, active=None):
    """Display the stored identities in a formatted table."""
    if not entries:
        print(f"{Fore.YELLOW}No identities stored yet.{Style.RESET_ALL}")
        print("Use 'gitswitch --add' to add one.")
        return

    table_data = []
    for tag, record in entries:
        # Mark the entry git is currently using
        marker = ""
        if active is not None and record.usable and record == active:
            marker = f"{Fore.GREEN}*{Style.RESET_ALL}"
        table_data.append([marker, tag, record.name, format_email(record)])

    print(f"\n{Fore.CYAN}Current git user options:{Style.RESET_ALL}")
    if store_path:
        print(f"Identity file: {store_path}")
    print(tabulate(table_data, headers=["", "Tag", "Name", "E-mail"], tablefmt="grid"))


def display_current(description):
    """Display the current git identity."""
    print(f"{Fore.CYAN}Current git user information:{Style.RESET_ALL}")
    print(description)
    print()


def display_success(message):
    """Print a success message in green."""
    print(f"{Fore.GREEN}{message}{Style.RESET_ALL}")


def display_error(message):
    """Print an error message in red."""
    print(f"{Fore.RED}Error: {message}{Style.RESET_ALL}")


def display_notice(message):
    """Print a warning or hint in yellow."""
    print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}")
