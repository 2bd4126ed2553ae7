import logging
import subprocess
import sys

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"


class ForeignFilter(logging.Filter):
    def filter(self, record):
        return record.name.startswith("fontmanifest")


def describe_error(value):
    """One line for a failed run, naming the git command when git failed."""
    if isinstance(value, subprocess.CalledProcessError):
        cmd = value.cmd if isinstance(value.cmd, str) else " ".join(value.cmd)
        return f"'{cmd}' failed with exit status {value.returncode}"
    return str(value) or type(value).__name__


def setup_logging(facility, args, name):
    python_minus_m = name == "__main__"
    user_mode = not python_minus_m and not getattr(args, "show_tracebacks", False)

    # Logs go to stderr, stdout carries tables and JSON.
    handler = RichHandler(console=Console(stderr=True))

    if user_mode:
        # pygit2, fontTools and friends stay quiet even at DEBUG.
        handler.addFilter(ForeignFilter())

    logging.basicConfig(
        level=getattr(args, "log_level", "INFO"),
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
    )

    log = logging.getLogger(facility)

    def user_error_messages(_type, value, _traceback):
        log.fatal(describe_error(value))

    if user_mode:
        sys.excepthook = user_error_messages

    return log
