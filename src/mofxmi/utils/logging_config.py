# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for the command-line entry point."""

import logging

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def configure_logging(level: int = logging.WARNING, fmt: str | None = None) -> None:
    """Attach a stream handler to the root logger once and set its level."""
    if fmt is None:
        fmt = DEFAULT_FORMAT
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)
    root.setLevel(level)
