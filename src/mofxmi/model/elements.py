# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Element variants of the parsed metamodel.

Every variant shares the identifier/name base of :class:`Element`. Fields
that a tag handler reads or derives are declared explicitly; any other XMI
attribute copied from the source document is retained as an extra field
under its original spelling.

Python field names are snake_case. The serialized form produced by
:meth:`Element.to_dict` uses the XMI camelCase spelling (``superClass``,
``isAttr``) and omits unset fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ###############
# Public Interface
# ###############


class Element(BaseModel):
    """A single modeled construct parsed from an XMI document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    id: str | None = None
    name: str | None = None

    def append_to(self, collection: str, child: Any) -> None:
        """Append *child* to the list stored under *collection*, creating it if absent."""
        members = getattr(self, collection, None)
        if members is None:
            members = []
            setattr(self, collection, members)
        members.append(child)

    def discard(self, *keys: str) -> None:
        """Remove fields given by their XMI spelling (declared or extra)."""
        fields = type(self).model_fields
        for key in keys:
            field_name = _field_name_for(type(self), key)
            if field_name in fields:
                setattr(self, field_name, None)
            elif self.__pydantic_extra__ is not None:
                self.__pydantic_extra__.pop(key, None)

    def to_dict(self) -> dict[str, Any]:
        """Return the element as a plain mapping keyed by XMI attribute names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Property(Element):
    """An owned attribute or association end."""

    type: str | None = None
    default: Any = None
    is_attr: bool | None = None
    is_id: bool | None = None
    is_many: bool | None = None
    is_virtual: bool | None = None
    is_reference: bool | None = None
    redefines: str | None = None

    # Raw cardinality and aggregation markers as written in the document.
    lower: str | None = None
    upper: str | None = None
    aggregation: str | None = None
    association: str | None = None
    is_composite: bool | None = None
    is_derived: bool | None = None
    is_derived_union: bool | None = None


class EnumerationLiteral(Element):
    """A value of an enumeration."""


class Namespace(Element):
    """An element that contains types, associations, and enumerations."""

    types: list[Classifier] | None = None
    associations: list[Classifier] | None = None
    enumerations: list[Classifier] | None = None


class Package(Namespace):
    """A metamodel package, carrying the namespace prefix and URI of the metamodel."""

    prefix: str | None = None
    uri: str | None = None


class Classifier(Namespace):
    """An owned member or packaged element: class, data type, enumeration, or association."""

    is_abstract: bool | None = None
    super_class: list[str] | None = None
    properties: list[Property] | None = None
    literal_values: list[EnumerationLiteral] | None = None
    owned_end: Property | None = None


class Generalization(Element):
    """An inheritance edge pointing at the general classifier's identifier."""

    general: str | None = None


class DefaultValue(Element):
    """The default value specification of a property."""

    value: Any = None
    instance: str | None = None


class UpperValue(Element):
    """The upper multiplicity bound of a property."""

    value: Any = None


class Tag(Element):
    """A name/value metadata pair attached to a previously parsed element."""

    element: str | None = None
    value: Any = None


# ################
# Implementation
# ################


def _field_name_for(cls: type[Element], key: str) -> str:
    """Map an XMI attribute name to the declared field name, or return it unchanged."""
    for field_name, info in cls.model_fields.items():
        if key in (field_name, info.alias):
            return field_name
    return key


# Resolve forward references in container models.
Namespace.model_rebuild()
Package.model_rebuild()
Classifier.model_rebuild()
