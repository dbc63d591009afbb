# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tag handlers and the dialect-aware dispatch table.

Dispatch is a two-level lookup. The XMI envelope tag always maps to the root
handler, which detects the dialect (``cmof`` or ``uml``) from the namespace
declarations of the document. Every other tag name is then looked up in the
fixed role table of that dialect.

A handler receives the open tag, the element of the nearest enclosing
handled tag (``None`` at the top), and the parse context. It returns the
element to use as parent for nested tags, or ``None`` when it only updates
its parent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import NoReturn

from mofxmi.model.elements import (
    Classifier,
    DefaultValue,
    Element,
    EnumerationLiteral,
    Generalization,
    Package,
    Property,
    Tag,
    UpperValue,
)
from mofxmi.model.registry import RegistryError
from mofxmi.model.types import MULTIPLICITY_MANY, Dialect, primitive_type_names
from mofxmi.parser.builder import XMI_ID, build_element, tag_kind
from mofxmi.parser.context import ParseContext
from mofxmi.parser.errors import (
    DuplicateIdentifierError,
    MissingNamespacePrefixError,
    MissingParentError,
    MissingReferenceError,
    UnknownTagHandlerError,
    XmiParseError,
)
from mofxmi.parser.namespaces import resolve_qualified_name, strip_xmi_suffix
from mofxmi.parser.tokenizer import OpenTag

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Handler = Callable[[OpenTag, Element | None, ParseContext], Element | None]

ROOT_TAG = "xmi:XMI"

# Metadata tag names that carry a package's namespace prefix and URI.
NS_PREFIX_TAG = "org.omg.xmi.nsPrefix"
NS_URI_TAG = "org.omg.xmi.nsURI"


class TagRole(Enum):
    """What a recognised tag contributes to the model."""

    ROOT = "root"
    METADATA = "metadata"
    PACKAGE = "package"
    OWNED_MEMBER = "owned-member"
    OWNED_ATTRIBUTE = "owned-attribute"
    OWNED_END = "owned-end"
    OWNED_LITERAL = "owned-literal"
    GENERALIZATION = "generalization"
    SUPER_CLASS = "super-class"
    TYPE = "type"
    DEFAULT_VALUE = "default-value"
    UPPER_VALUE = "upper-value"
    REDEFINED_PROPERTY = "redefined-property"


def role_for(name: str, context: ParseContext) -> TagRole | None:
    """Return the role of tag *name* in the active dialect, or ``None`` if it is ignored.

    Raises:
        MissingNamespacePrefixError: If *name* is not the XMI envelope and the
            dialect has not been detected yet.
    """
    if name == ROOT_TAG:
        return TagRole.ROOT
    if context.dialect is None:
        raise MissingNamespacePrefixError(f"namespace prefix not found when dispatching <{name}>")
    return _ROLE_TABLES[context.dialect].get(name)


def handler_for(name: str, context: ParseContext) -> Handler | None:
    """Return the handler for tag *name*, or ``None`` if the tag is ignored.

    Raises:
        MissingNamespacePrefixError: If the dialect is not known yet.
        UnknownTagHandlerError: If the tag has a role but no handler implements it.
    """
    role = role_for(name, context)
    if role is None:
        return None
    handler = _HANDLERS.get(role)
    if handler is None:
        raise UnknownTagHandlerError(f"no handler for tag <{name}> ({role.value})")
    return handler


def collection_for(kind: str | None, dialect: Dialect) -> str | None:
    """Return the container field (``types``, ``associations``, ``enumerations``) for *kind*."""
    if kind is None:
        return None
    prefix, _, local = kind.partition(":")
    if prefix != dialect.prefix:
        return None
    return _COLLECTIONS.get(local)


def primitive_type(href: str) -> str | None:
    """Return the primitive type named by the fragment of *href*, if it is one."""
    name = href.split("#")[-1]
    return name if name in _PRIMITIVE_TYPE_NAMES else None


def compute_cardinality(prop: Property) -> None:
    """Derive ``is_many``, ``is_virtual``, ``is_attr``, and ``is_reference`` in that order.

    Only flags that hold are set; the others stay unset. Tags nested in the
    attribute (``type``, ``upperValue``) may later revoke ``is_attr``.
    """
    is_composite = bool(prop.is_composite) or prop.aggregation == "composite"
    is_single = not prop.upper and (not prop.lower or prop.lower == "0")
    is_many = not is_single
    if is_many:
        prop.is_many = True
    is_virtual = bool(prop.is_derived or prop.is_derived_union)
    if is_virtual:
        prop.is_virtual = True
    if not is_composite and not is_many and not is_virtual:
        prop.is_attr = True
    if prop.association and not is_composite:
        prop.is_reference = True


# ----------------------------------------------------------------------
# Handlers
# ----------------------------------------------------------------------


def parse_xmi(tag: OpenTag, parent: Element | None, context: ParseContext) -> None:
    """Detect the dialect from the ``xmlns:*`` declarations of the envelope."""
    dialect = None
    for key in tag.attributes:
        if not key.startswith("xmlns:"):
            continue
        if key.endswith(Dialect.CMOF.prefix):
            dialect = Dialect.CMOF
        elif key.endswith(Dialect.UML.prefix):
            dialect = Dialect.UML
    context.dialect = dialect
    logger.debug("Detected dialect %s", dialect.value if dialect else None)
    return None


def parse_package(tag: OpenTag, parent: Element | None, context: ParseContext) -> Package:
    element = build_element(Package, tag, context)
    _register(element, tag, context, tag_kind(tag) or tag.name)

    name = tag.attributes.get("name")
    element.prefix = name.lower() if name else None

    uri = tag.attributes.get("uri") or tag.attributes.get("URI")
    if not uri:
        _fail(MissingReferenceError, "package uri not found", tag)

    if context.clean:
        element.discard("id", "URI")

    element.uri = strip_xmi_suffix(uri)
    return element


def parse_owned_member(tag: OpenTag, parent: Element | None, context: ParseContext) -> Classifier:
    parent = _require_parent(tag, parent)
    if context.dialect is None:
        _fail(MissingNamespacePrefixError, f"namespace prefix not found for <{tag.name}>", tag)

    # 'Foo Bar' becomes ['Foo', 'Bar']
    overrides: dict[str, list[str]] = {}
    raw_super_class = tag.attributes.get("superClass")
    if raw_super_class is not None:
        overrides["superClass"] = [
            resolve_qualified_name(name, context.prefix_namespaces) for name in raw_super_class.split()
        ]

    element = build_element(Classifier, tag, context, **overrides)
    kind = tag_kind(tag)
    _register(element, tag, context, kind)

    if context.clean:
        element.discard("id")

    collection = collection_for(kind, context.dialect)
    if collection is not None:
        parent.append_to(collection, element)
    return element


def parse_owned_attribute(tag: OpenTag, parent: Element | None, context: ParseContext) -> Property:
    parent = _require_parent(tag, parent)
    element = build_element(Property, tag, context)
    compute_cardinality(element)

    if context.clean:
        element.discard(*_OWNED_ATTRIBUTE_BOOKKEEPING)

    parent.append_to("properties", element)
    return element


def parse_owned_end(tag: OpenTag, parent: Element | None, context: ParseContext) -> Property:
    parent = _require_parent(tag, parent)
    element = build_element(Property, tag, context)
    parent.owned_end = element
    return element


def parse_owned_literal(tag: OpenTag, parent: Element | None, context: ParseContext) -> EnumerationLiteral:
    parent = _require_parent(tag, parent)
    element = build_element(EnumerationLiteral, tag, context)
    _register(element, tag, context, tag_kind(tag))

    parent.append_to("literal_values", element)

    if context.clean:
        element.discard("classifier", "enumeration", "id")
    return element


def parse_generalization(tag: OpenTag, parent: Element | None, context: ParseContext) -> Generalization:
    parent = _require_parent(tag, parent)
    element = build_element(Generalization, tag, context)
    if not element.general:
        _fail(MissingReferenceError, "generalization 'general' not found", tag)

    _register(element, tag, context, tag_kind(tag))
    parent.append_to("super_class", element.general)
    return element


def parse_super_class(tag: OpenTag, parent: Element | None, context: ParseContext) -> None:
    parent = _require_parent(tag, parent)
    href = _require_href(tag)
    name = primitive_type(href) or href
    parent.append_to("super_class", resolve_qualified_name(name, context.prefix_namespaces))
    return None


def parse_type(tag: OpenTag, parent: Element | None, context: ParseContext) -> None:
    parent = _require_parent(tag, parent)
    href = _require_href(tag)
    primitive = primitive_type(href)
    parent.type = resolve_qualified_name(primitive or href, context.prefix_namespaces)

    # Complex types cannot be rendered as attributes unless referenced.
    if getattr(parent, "is_attr", None) and not getattr(parent, "is_reference", None) and primitive is None:
        parent.is_attr = None
    return None


def parse_default_value(tag: OpenTag, parent: Element | None, context: ParseContext) -> DefaultValue:
    parent = _require_parent(tag, parent)
    element = build_element(DefaultValue, tag, context)
    parent.default = element.instance if element.instance else element.value
    return element


def parse_upper_value(tag: OpenTag, parent: Element | None, context: ParseContext) -> UpperValue:
    element = build_element(UpperValue, tag, context)
    if tag.attributes.get("value") == MULTIPLICITY_MANY:
        parent = _require_parent(tag, parent)
        parent.is_many = True
        parent.is_attr = None
    return element


def parse_redefined_property(tag: OpenTag, parent: Element | None, context: ParseContext) -> None:
    parent = _require_parent(tag, parent)
    href = _require_href(tag)
    # 'DI.cmof#DiagramElement-modelElement' becomes 'di:DiagramElement#modelElement'
    parent.redefines = resolve_qualified_name(href, context.prefix_namespaces).replace("-", "#", 1)
    return None


def parse_tag(tag: OpenTag, parent: Element | None, context: ParseContext) -> Tag:
    element = build_element(Tag, tag, context)
    referenced = context.registry.get(element.element)
    if referenced is None:
        _fail(MissingReferenceError, f"referenced element <{element.element}> not found", tag)

    if element.name == NS_PREFIX_TAG:
        referenced.prefix = element.value
    elif element.name == NS_URI_TAG:
        referenced.uri = strip_xmi_suffix(element.value)
    return element


# ################
# Implementation
# ################

_PRIMITIVE_TYPE_NAMES = primitive_type_names()

_COLLECTIONS: dict[str, str] = {
    "Association": "associations",
    "Class": "types",
    "DataType": "types",
    "PrimitiveType": "types",
    "Type": "types",
    "Enumeration": "enumerations",
}

_OWNED_ATTRIBUTE_BOOKKEEPING = (
    "aggregation",
    "association",
    "datatype",
    "id",
    "isComposite",
    "isDerived",
    "isDerivedUnion",
    "isOrdered",
    "lower",
    "upper",
    "visibility",
)

_HANDLERS: dict[TagRole, Handler] = {
    TagRole.ROOT: parse_xmi,
    TagRole.METADATA: parse_tag,
    TagRole.PACKAGE: parse_package,
    TagRole.OWNED_MEMBER: parse_owned_member,
    TagRole.OWNED_ATTRIBUTE: parse_owned_attribute,
    TagRole.OWNED_END: parse_owned_end,
    TagRole.OWNED_LITERAL: parse_owned_literal,
    TagRole.GENERALIZATION: parse_generalization,
    TagRole.SUPER_CLASS: parse_super_class,
    TagRole.TYPE: parse_type,
    TagRole.DEFAULT_VALUE: parse_default_value,
    TagRole.UPPER_VALUE: parse_upper_value,
    TagRole.REDEFINED_PROPERTY: parse_redefined_property,
}


def _role_table(dialect: Dialect) -> dict[str, TagRole]:
    return {
        dialect.qualify("Tag"): TagRole.METADATA,
        dialect.qualify("Package"): TagRole.PACKAGE,
        "defaultValue": TagRole.DEFAULT_VALUE,
        "generalization": TagRole.GENERALIZATION,
        "ownedAttribute": TagRole.OWNED_ATTRIBUTE,
        "ownedEnd": TagRole.OWNED_END,
        "ownedLiteral": TagRole.OWNED_LITERAL,
        "ownedMember": TagRole.OWNED_MEMBER,
        "packagedElement": TagRole.OWNED_MEMBER,
        "redefinedProperty": TagRole.REDEFINED_PROPERTY,
        "superClass": TagRole.SUPER_CLASS,
        "type": TagRole.TYPE,
        "upperValue": TagRole.UPPER_VALUE,
    }


_ROLE_TABLES: dict[Dialect, dict[str, TagRole]] = {dialect: _role_table(dialect) for dialect in Dialect}


def _fail(error_cls: type[XmiParseError], message: str, tag: OpenTag) -> NoReturn:
    logger.debug("%s: <%s %s>", message, tag.name, dict(tag.attributes))
    raise error_cls(message, tag.line)


def _require_parent(tag: OpenTag, parent: Element | None) -> Element:
    if parent is None:
        _fail(MissingParentError, f"parent not found for <{tag.name}>", tag)
    return parent


def _require_href(tag: OpenTag) -> str:
    href = tag.attributes.get("href")
    if not href:
        _fail(MissingReferenceError, f"href not found on <{tag.name}>", tag)
    return href


def _register(element: Element, tag: OpenTag, context: ParseContext, kind: str | None) -> None:
    try:
        context.registry.register(element, tag.attributes.get(XMI_ID), kind)
    except RegistryError as exc:
        error_cls = DuplicateIdentifierError if exc.element_id else MissingReferenceError
        _fail(error_cls, str(exc), tag)
