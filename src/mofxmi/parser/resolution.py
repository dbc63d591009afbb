# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cross-reference resolution for a fully streamed document.

While the document streams in, property types, default values, and
superclasses are recorded as the identifiers written in the source. Once
every element is registered, a single flat pass over the identifier index
rewrites each identifier that resolves into the referenced element's name.
Identifiers that do not resolve are left untouched: they name primitives or
elements of other documents.
"""

from __future__ import annotations

import logging

from mofxmi.model.elements import Element, Property
from mofxmi.model.registry import ElementRegistry
from mofxmi.model.types import ID_PROPERTY_NAME, ID_TYPE_NAME, STRING_WRAPPER_TYPE_NAMES, PrimitiveType

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def resolve_references(registry: ElementRegistry) -> None:
    """Rewrite identifier references of every registered element into names.

    For each property of an element:

    - a resolvable ``type`` becomes the referenced element's name, or
      ``String`` for the ``URI``, ``QName``, and ``ID`` wrapper primitives;
      an ``ID`` type also marks the property as identifier attribute;
    - a property named ``id`` whose type does not resolve is marked as
      identifier attribute;
    - a resolvable ``default`` becomes the referenced element's name.

    Each resolvable ``super_class`` entry becomes the referenced name.

    Running the pass again on the same registry changes nothing further.
    """
    resolved = 0
    for element in registry:
        properties = getattr(element, "properties", None)
        if properties:
            for prop in properties:
                resolved += _resolve_property(prop, registry)
        super_class = getattr(element, "super_class", None)
        if super_class:
            names = [_name_of(reference, registry) for reference in super_class]
            resolved += sum(1 for old, new in zip(super_class, names, strict=True) if old != new)
            element.super_class = names
    logger.debug("Resolved %d references across %d elements", resolved, len(registry))


# ################
# Implementation
# ################

_STRING_TYPE_NAME = PrimitiveType.STRING.value


def _resolve_property(prop: Property, registry: ElementRegistry) -> int:
    """Resolve the type and default of one property; return the number of rewrites."""
    rewrites = 0
    type_element = registry.get(prop.type)
    if type_element is not None:
        type_name = type_element.name
        if type_name == ID_TYPE_NAME:
            _mark_identifier(prop)
        new_type = _STRING_TYPE_NAME if type_name in STRING_WRAPPER_TYPE_NAMES else type_name
        rewrites += new_type != prop.type
        prop.type = new_type
    elif prop.name == ID_PROPERTY_NAME:
        _mark_identifier(prop)

    default_element = registry.get(prop.default)
    if default_element is not None:
        rewrites += default_element.name != prop.default
        prop.default = default_element.name
    return rewrites


def _mark_identifier(prop: Property) -> None:
    prop.is_attr = True
    prop.is_id = True


def _name_of(reference: str, registry: ElementRegistry) -> str:
    element: Element | None = registry.get(reference)
    if element is None or element.name is None:
        return reference
    return element.name
