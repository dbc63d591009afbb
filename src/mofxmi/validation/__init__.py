# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed metamodels (unresolved references, inheritance cycles)."""

from mofxmi.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
