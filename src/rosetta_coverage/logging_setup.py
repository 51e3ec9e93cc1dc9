"""Console logging for the CLI."""

from __future__ import annotations

import logging
import sys

_QUIET_THIRD_PARTY = ("httpx", "httpcore")


class _ThirdPartyNoiseFilter(logging.Filter):
    """Keep our own logs; let HTTP client libraries through only at WARNING+."""

    def __init__(self, verbose: bool) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("rosetta_coverage."):
            return True
        if self.verbose:
            return True
        if record.name.startswith(_QUIET_THIRD_PARTY):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(*, verbose: bool = False) -> None:
    """Install one stderr handler on the root logger.

    Call once per process, before the first log record is emitted.
    """

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ),
    )
    handler.addFilter(_ThirdPartyNoiseFilter(verbose))
    root.addHandler(handler)
    logging.captureWarnings(True)
