# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parse OMG MOF/UML XMI metamodel documents into a queryable element model."""

from mofxmi.model.registry import Model
from mofxmi.parser import ParseOptions, XmiParseError, parse, parse_file

__all__ = [
    "Model",
    "ParseOptions",
    "XmiParseError",
    "parse",
    "parse_file",
]
