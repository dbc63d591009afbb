# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Streaming XMI parser: tokenizer adapter, tag handlers, and reference resolution."""

from mofxmi.parser.context import ParseContext, ParseOptions
from mofxmi.parser.driver import parse, parse_file
from mofxmi.parser.errors import (
    DuplicateIdentifierError,
    MalformedDocumentError,
    MissingNamespacePrefixError,
    MissingParentError,
    MissingReferenceError,
    UnknownTagHandlerError,
    XmiParseError,
)
from mofxmi.parser.resolution import resolve_references

__all__ = [
    "parse",
    "parse_file",
    "resolve_references",
    "ParseContext",
    "ParseOptions",
    "XmiParseError",
    "MalformedDocumentError",
    "MissingNamespacePrefixError",
    "UnknownTagHandlerError",
    "MissingParentError",
    "MissingReferenceError",
    "DuplicateIdentifierError",
]
