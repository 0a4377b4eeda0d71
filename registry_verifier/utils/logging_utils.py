import logging
import sys


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


def configure_cli_logging(verbose: bool = False) -> None:
    """Route verifier log records to the terminal.

    - DEBUG (with --verbose) and INFO go to stdout
    - WARNING/ERROR/CRITICAL go to stderr

    Verification diagnostics are rendered by the CLI itself; the log stream
    only carries progress and configuration messages.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    formatter = logging.Formatter("%(levelname)s [%(name)s] %(message)s")

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(logging.INFO))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)
