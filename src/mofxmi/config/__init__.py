# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project-level parser configuration."""

from mofxmi.config.loader import (
    CONFIG_FILE_NAME,
    ParserConfig,
    ParserConfigError,
    load_parser_config,
    save_parser_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ParserConfig",
    "ParserConfigError",
    "load_parser_config",
    "save_parser_config",
]
