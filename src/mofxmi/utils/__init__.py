# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers."""

from mofxmi.utils.logging_config import configure_logging

__all__ = ["configure_logging"]
