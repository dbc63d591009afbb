# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Turns an open-tag event into an element record."""

from __future__ import annotations

import logging
from functools import cache
from typing import Any, TypeVar, get_args

from pydantic import TypeAdapter, ValidationError

from mofxmi.model.elements import Element
from mofxmi.parser.context import ParseContext
from mofxmi.parser.namespaces import resolve_qualified_name
from mofxmi.parser.tokenizer import OpenTag

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

XMI_ID = "xmi:id"
XMI_TYPE = "xmi:type"

E = TypeVar("E", bound=Element)


def build_attributes(tag: OpenTag, context: ParseContext, cls: type[Element] = Element) -> dict[str, Any]:
    """Return the visible attributes of *tag* as fields of variant *cls*.

    ``xmi:`` attributes and namespace declarations are dropped, other values
    are canonicalized with the caller's prefix table. ``"true"`` and
    ``"false"`` become booleans unless *cls* declares the attribute as text.
    ``id`` is always set from ``xmi:id`` (``None`` when the tag has none).

    A value that does not fit the field *cls* declares for it (for example
    text given for ``ownedEnd``, which only a nested tag can fill) is left
    out and logged at DEBUG level.
    """
    declared = _declared_fields(cls)
    attributes: dict[str, Any] = {}
    for key, raw in tag.attributes.items():
        if key.startswith(_RESERVED_PREFIX) or _is_namespace_declaration(key):
            continue
        value = resolve_qualified_name(raw, context.prefix_namespaces)
        field = declared.get(key)
        if field is None:
            attributes[key] = _BOOLEANS.get(value, value)
            continue
        adapter, accepts_bool = field
        if accepts_bool and value in _BOOLEANS:
            attributes[key] = _BOOLEANS[value]
            continue
        try:
            attributes[key] = adapter.validate_python(value)
        except ValidationError:
            logger.debug("Line %s: dropped attribute %s=%r of <%s>", tag.line, key, raw, tag.name)
    attributes["id"] = tag.attributes.get(XMI_ID)
    return attributes


def build_element(cls: type[E], tag: OpenTag, context: ParseContext, **fields: Any) -> E:
    """Build an element of variant *cls* from *tag*.

    Keyword *fields* (XMI spelling) replace the values read from the tag.
    """
    attributes = build_attributes(tag, context, cls)
    attributes.update(fields)
    return cls.model_validate(attributes)


def tag_kind(tag: OpenTag) -> str | None:
    """Return the declared concrete kind (``xmi:type``) of *tag*."""
    return tag.attributes.get(XMI_TYPE)


# ################
# Implementation
# ################

_RESERVED_PREFIX = "xmi:"

_BOOLEANS = {"true": True, "false": False}


def _is_namespace_declaration(key: str) -> bool:
    return key == "xmlns" or key.startswith("xmlns:")


@cache
def _declared_fields(cls: type[Element]) -> dict[str, tuple[TypeAdapter[Any], bool]]:
    """Map the XMI spelling of each declared field of *cls* to its validator."""
    fields: dict[str, tuple[TypeAdapter[Any], bool]] = {}
    for name, info in cls.model_fields.items():
        annotation = info.annotation
        accepts_bool = annotation is Any or annotation is bool or bool in get_args(annotation)
        fields[info.alias or name] = (TypeAdapter(annotation), accepts_bool)
    return fields
