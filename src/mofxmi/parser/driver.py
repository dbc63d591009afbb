# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Streaming parser for MOF (CMOF) and UML XMI metamodel documents.

Drives the tag events of a document through the tag handlers, keeping a
stack that mirrors document nesting, and runs the reference resolution pass
once the stream has ended.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from mofxmi.model.elements import Element
from mofxmi.model.registry import Model
from mofxmi.parser.context import ParseContext, ParseOptions
from mofxmi.parser.errors import MalformedDocumentError
from mofxmi.parser.handlers import handler_for
from mofxmi.parser.resolution import resolve_references
from mofxmi.parser.tokenizer import CloseTag, OpenTag, TagEvent, iter_events

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

READ_CHUNK_SIZE = 64 * 1024


def parse(document: str | bytes, options: ParseOptions | None = None, **overrides: Any) -> Model:
    """Parse an XMI document held in memory.

    Args:
        document: The document text. ``str`` input is parsed as UTF-8
            regardless of the encoding named in its XML declaration; ``bytes``
            honour the declaration.
        options: Parse options; defaults apply when omitted.
        **overrides: Individual option values (``clean``, ``strict``,
            ``prefix_namespaces``) applied on top of *options*.

    Returns:
        The parsed model with its identifier and kind indices.

    Raises:
        MalformedDocumentError: If the markup is malformed (strict mode).
        MissingNamespacePrefixError: If no ``cmof`` or ``uml`` namespace is
            declared by the XMI envelope.
        MissingParentError: If a tag that needs an enclosing element has none.
        MissingReferenceError: If a mandatory attribute or referenced element
            is absent.
        DuplicateIdentifierError: If two elements share an identifier.
    """
    if isinstance(document, str):
        return _parse_chunks([document.encode("utf-8")], _merge(options, overrides), encoding="utf-8")
    return _parse_chunks([document], _merge(options, overrides))


def parse_file(path: Path, options: ParseOptions | None = None, **overrides: Any) -> Model:
    """Parse an XMI document from *path*, streaming it in chunks.

    Raises:
        OSError: If the file cannot be read.
        XmiParseError: See :func:`parse`.
    """
    merged = _merge(options, overrides)
    with path.open("rb") as stream:
        return _parse_chunks(_read_chunks(stream), merged)


# ################
# Implementation
# ################


@dataclass
class _Frame:
    """One open tag on the parse stack.

    Attributes:
        name: Tag name, matched against the closing tag.
        element: Element produced by the tag's handler, if any.
    """

    name: str
    element: Element | None


class _Driver:
    """Feeds tag events to handlers for a single document."""

    def __init__(self, context: ParseContext) -> None:
        self._context = context
        self._stack: list[_Frame] = []

    def run(self, events: Iterable[TagEvent]) -> Model:
        for event in events:
            if isinstance(event, OpenTag):
                self._open(event)
            elif isinstance(event, CloseTag):
                self._close(event)
        resolve_references(self._context.registry)
        return self._context.registry.freeze()

    def _open(self, tag: OpenTag) -> None:
        handler = handler_for(tag.name, self._context)
        if handler is None:
            # Skipped tags still occupy a frame so that closing stays balanced.
            self._stack.append(_Frame(tag.name, None))
            return
        element = handler(tag, self._parent(), self._context)
        self._stack.append(_Frame(tag.name, element))

    def _close(self, tag: CloseTag) -> None:
        if not self._stack or self._stack[-1].name != tag.name:
            open_name = self._stack[-1].name if self._stack else None
            raise MalformedDocumentError(f"unbalanced close tag </{tag.name}> for <{open_name}>", tag.line)
        self._stack.pop()

    def _parent(self) -> Element | None:
        """Return the element of the innermost open tag that produced one."""
        for frame in reversed(self._stack):
            if frame.element is not None:
                return frame.element
        return None


def _merge(options: ParseOptions | None, overrides: dict[str, Any]) -> ParseOptions:
    options = options or ParseOptions()
    if overrides:
        options = ParseOptions.model_validate({**options.model_dump(), **overrides})
    return options


def _parse_chunks(chunks: Iterable[bytes], options: ParseOptions, *, encoding: str | None = None) -> Model:
    context = ParseContext(options=options)
    model = _Driver(context).run(iter_events(chunks, strict=options.strict, encoding=encoding))
    logger.info(
        "Parsed %d elements of %d kinds (%s dialect)",
        len(model.elements_by_id),
        len(model.elements_by_type),
        context.dialect.value if context.dialect else "unknown",
    )
    return model


def _read_chunks(stream: BinaryIO) -> Iterator[bytes]:
    while chunk := stream.read(READ_CHUNK_SIZE):
        yield chunk
