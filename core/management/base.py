"""
Base class for the operator management commands.

Any failure inside a command is logged once and reported as a CommandError,
so the operator sees one line instead of a traceback.
"""

import argparse
import logging

from django.core.management.base import BaseCommand, CommandError

logger = logging.getLogger(__name__)


def describe_exception(exc: BaseException) -> str:
    """
    Describe an exception and the exception that caused it.

    Args:
        exc: Exception to describe

    Returns:
        "An exception occurred: <message>. Additional information: <cause>"
    """
    cause = exc.__cause__ or exc.__context__
    cause_message = _message(cause) if cause is not None else ""
    return f"An exception occurred: {_message(exc)}. Additional information: {cause_message}"


def _message(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


def digits(value: str) -> int:
    """argparse type accepting digit characters only."""
    if not value or not value.isdigit() or not value.isascii():
        raise argparse.ArgumentTypeError(f"'{value}' must contain digits only")
    return int(value)


class ReportingCommand(BaseCommand):
    """BaseCommand that turns any unhandled exception into a CommandError."""

    def execute(self, *args, **options):
        """Run the command, reporting failures."""
        try:
            return super().execute(*args, **options)
        except CommandError:
            raise
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Command %s failed: %s", self.__class__.__module__, e, exc_info=True)
            raise CommandError(describe_exception(e)) from e
