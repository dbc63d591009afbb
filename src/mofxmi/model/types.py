# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reserved type names and metamodel dialects."""

from __future__ import annotations

from enum import Enum

# ###############
# Public Interface
# ###############


class Dialect(Enum):
    """The two sibling metamodel dialects an XMI document can be written in.

    The value is the namespace prefix under which the dialect's tags appear
    (``cmof:Package`` vs ``uml:Package``).
    """

    CMOF = "cmof"
    UML = "uml"

    @property
    def prefix(self) -> str:
        return self.value

    def qualify(self, local_name: str) -> str:
        """Return ``local_name`` qualified with this dialect's prefix."""
        return f"{self.value}:{local_name}"


class PrimitiveType(Enum):
    """Primitive types recognised in ``href`` references to the MOF primitive library."""

    BOOLEAN = "Boolean"
    ELEMENT = "Element"
    INTEGER = "Integer"
    REAL = "Real"
    STRING = "String"


# Name of the primitive that marks a property as the element identifier.
ID_TYPE_NAME = "ID"

# Name of the property that is treated as the identifier when its type is unknown.
ID_PROPERTY_NAME = "id"

# Primitive wrapper types that are rendered as plain strings.
STRING_WRAPPER_TYPE_NAMES: frozenset[str] = frozenset({"URI", "QName", ID_TYPE_NAME})

# Upper bound literal that marks a multi-valued property.
MULTIPLICITY_MANY = "*"


def primitive_type_names() -> frozenset[str]:
    """Return the names of all recognised primitive types."""
    return frozenset(p.value for p in PrimitiveType)
