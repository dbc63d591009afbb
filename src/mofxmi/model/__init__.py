# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Object model of a parsed MOF/UML metamodel (packages, classifiers, properties, etc.)."""

from mofxmi.model.elements import (
    Classifier,
    DefaultValue,
    Element,
    EnumerationLiteral,
    Generalization,
    Namespace,
    Package,
    Property,
    Tag,
    UpperValue,
)
from mofxmi.model.registry import ElementRegistry, Model, RegistryError
from mofxmi.model.types import (
    ID_PROPERTY_NAME,
    ID_TYPE_NAME,
    MULTIPLICITY_MANY,
    STRING_WRAPPER_TYPE_NAMES,
    Dialect,
    PrimitiveType,
    primitive_type_names,
)

__all__ = [
    # Reserved names
    "Dialect",
    "PrimitiveType",
    "ID_PROPERTY_NAME",
    "ID_TYPE_NAME",
    "MULTIPLICITY_MANY",
    "STRING_WRAPPER_TYPE_NAMES",
    "primitive_type_names",
    # Elements
    "Element",
    "Namespace",
    "Package",
    "Classifier",
    "Property",
    "EnumerationLiteral",
    "Generalization",
    "DefaultValue",
    "UpperValue",
    "Tag",
    # Indices
    "ElementRegistry",
    "Model",
    "RegistryError",
]
