# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Streaming XML event source for XMI documents.

Adapts lxml's pull parser to a flat sequence of open-tag and close-tag events
in document order. Tag and attribute names are reported in their prefixed
form (``cmof:Package``, ``xmi:id``) as written in the source, and namespace
declarations appear as ``xmlns`` / ``xmlns:<prefix>`` attributes of the tag
that declares them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from lxml import etree

from mofxmi.parser.errors import MalformedDocumentError

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class OpenTag:
    """An opening tag with its attributes.

    Attributes:
        name: Prefixed tag name, e.g. ``ownedAttribute`` or ``cmof:Package``.
        attributes: Prefixed attribute name to raw string value.
        line: 1-based source line of the tag, when known.
    """

    name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    line: int | None = None


@dataclass(frozen=True)
class CloseTag:
    """A closing tag."""

    name: str
    line: int | None = None


TagEvent = OpenTag | CloseTag


def iter_events(
    chunks: Iterable[str | bytes],
    *,
    strict: bool = True,
    encoding: str | None = None,
) -> Iterator[TagEvent]:
    """Yield tag events for a document fed in *chunks*.

    Events are yielded as soon as the pull parser makes them available, so a
    document read from disk is processed while it streams in.

    Args:
        chunks: Successive pieces of the document.
        strict: When ``False``, the parser recovers from malformed markup
            instead of failing.
        encoding: Overrides the encoding declared by the document.

    Raises:
        MalformedDocumentError: On the first markup error in strict mode.
    """
    return _Tokenizer(strict=strict, encoding=encoding).run(chunks)


# ################
# Implementation
# ################

_XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


class _Tokenizer:
    """Wraps one lxml pull parser for a single document."""

    def __init__(self, *, strict: bool, encoding: str | None) -> None:
        self._parser = etree.XMLPullParser(
            events=("start", "end", "start-ns"),
            recover=not strict,
            encoding=encoding,
            remove_comments=True,
            remove_pis=True,
            resolve_entities=False,
            huge_tree=True,
        )
        # Namespace declarations reported ahead of the tag that declares them.
        self._pending_declarations: dict[str, str] = {}

    def run(self, chunks: Iterable[str | bytes]) -> Iterator[TagEvent]:
        try:
            for chunk in chunks:
                self._parser.feed(chunk)
                yield from self._drain()
            self._parser.close()
            yield from self._drain()
        except etree.XMLSyntaxError as exc:
            raise MalformedDocumentError(exc.msg or str(exc), exc.lineno) from exc

    def _drain(self) -> Iterator[TagEvent]:
        for event, payload in self._parser.read_events():
            if event == "start-ns":
                prefix, uri = payload
                self._pending_declarations[f"xmlns:{prefix}" if prefix else "xmlns"] = uri
                continue
            if not isinstance(payload.tag, str):
                continue
            name = _prefixed_name(payload.tag, payload.prefix)
            if event == "start":
                attributes = self._pending_declarations
                self._pending_declarations = {}
                attributes.update(_prefixed_attributes(payload))
                yield OpenTag(name=name, attributes=attributes, line=payload.sourceline)
            else:
                yield CloseTag(name=name, line=payload.sourceline)
                # Children were already reported; drop them to keep memory flat.
                payload.clear(keep_tail=True)


def _prefixed_name(clark_name: str, prefix: str | None) -> str:
    """Turn ``{uri}local`` into ``prefix:local`` (or ``local`` for the default namespace)."""
    if not clark_name.startswith("{"):
        return clark_name
    local = clark_name.rpartition("}")[2]
    return f"{prefix}:{local}" if prefix else local


def _prefixed_attributes(element: etree._Element) -> dict[str, str]:
    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
    prefixes[_XML_NAMESPACE] = "xml"
    attributes: dict[str, str] = {}
    for key, value in element.attrib.items():
        if key.startswith("{"):
            uri, _, local = key[1:].partition("}")
            prefix = prefixes.get(uri)
            key = f"{prefix}:{local}" if prefix else local
        attributes[key] = value
    return attributes
