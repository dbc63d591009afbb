# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while parsing an XMI document.

All of them are fatal: the parse is aborted and no partial model is returned.
"""

# ###############
# Public Interface
# ###############


class XmiParseError(Exception):
    """Base class for all parse failures.

    Attributes:
        line: 1-based source line of the offending tag, when known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(f"Line {line}: {message}" if line is not None else message)
        self.line = line


class MalformedDocumentError(XmiParseError):
    """Raised when the XML tokenizer rejects the markup."""


class MissingNamespacePrefixError(XmiParseError):
    """Raised when a tag is dispatched before the dialect (``cmof`` or ``uml``) is known."""


class UnknownTagHandlerError(XmiParseError):
    """Raised when a tag is required to have a handler but none is registered."""


class MissingParentError(XmiParseError):
    """Raised when a handler that needs an enclosing element finds none."""


class MissingReferenceError(XmiParseError):
    """Raised when a mandatory attribute or referenced element is absent."""


class DuplicateIdentifierError(XmiParseError):
    """Raised when two elements of one document share an identifier."""
