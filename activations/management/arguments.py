"""
Command line arguments shared by the commands that register licenses.
"""

import getpass

from django.conf import settings

from activations.application.commands.register_license import RegisterLicenseCommand
from core.management.base import digits


def add_registration_arguments(parser):
    """Add activation server arguments to a command parser."""
    group = parser.add_argument_group("activation server")
    group.add_argument(
        "--server-url",
        type=str,
        default=settings.ACTIVATION_SERVER_URL,
        help="Activation server base URL (default: ACTIVATION_SERVER_URL)",
    )
    group.add_argument(
        "--username",
        type=str,
        default=settings.ACTIVATION_SERVER_USERNAME,
        help="Activation server username (default: ACTIVATION_SERVER_USERNAME)",
    )
    group.add_argument(
        "--password",
        type=str,
        default=None,
        help="Activation server password (prompted when omitted)",
    )
    installs = group.add_mutually_exclusive_group()
    installs.add_argument(
        "--install-limit",
        type=digits,
        default=0,
        help="Number of installs allowed for the license",
    )
    installs.add_argument(
        "--unlimited-installs",
        action="store_true",
        help="Allow unlimited installs",
    )


def registration_from_options(options) -> RegisterLicenseCommand:
    """
    Build a RegisterLicenseCommand from parsed options.

    The password is prompted for when a username is set and no password
    was given. Unlimited installs carry no install limit.
    """
    password = options["password"]
    if password is None and options["username"]:
        password = getpass.getpass("Activation server password: ")
    return RegisterLicenseCommand(
        server_url=options["server_url"] or "",
        username=options["username"] or "",
        password=password or "",
        install_limit=0 if options["unlimited_installs"] else options["install_limit"],
        unlimited_installs=options["unlimited_installs"],
    )


def describe_registration(status_code, body) -> str:
    """One line describing an activation server response."""
    return f"Activation server responded HTTP {status_code}: {body}"
