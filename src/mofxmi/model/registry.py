# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier and kind indices built while an XMI document is parsed."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from mofxmi.model.elements import Element, Package

# ###############
# Public Interface
# ###############


class RegistryError(Exception):
    """Raised when an element cannot be registered.

    Attributes:
        element_id: The offending identifier (``None`` when it is missing).
    """

    def __init__(self, message: str, element_id: str | None) -> None:
        super().__init__(message)
        self.element_id = element_id


class ElementRegistry:
    """The two growing indices populated by tag handlers during a parse.

    Elements are indexed by their persistent identifier and grouped by their
    declared kind (the ``xmi:type`` of the source tag). Insertion order is
    preserved in both indices.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, Element] = {}
        self._by_type: dict[str, list[Element]] = {}

    def register(self, element: Element, element_id: str | None, kind: str | None) -> None:
        """Add *element* under *element_id* and append it to the list for *kind*.

        Raises:
            RegistryError: If the identifier is empty or already registered.
        """
        if not element_id:
            raise RegistryError(f"{kind or 'element'} has no identifier", element_id)
        if element_id in self._by_id:
            raise RegistryError(f"duplicate identifier '{element_id}'", element_id)
        self._by_id[element_id] = element
        if kind is not None:
            self._by_type.setdefault(kind, []).append(element)

    def get(self, element_id: Any) -> Element | None:
        """Return the element registered under *element_id*, if any.

        Non-string keys (for example boolean default values) never resolve.
        """
        if not isinstance(element_id, str):
            return None
        return self._by_id.get(element_id)

    def __contains__(self, element_id: object) -> bool:
        return isinstance(element_id, str) and element_id in self._by_id

    def __iter__(self) -> Iterator[Element]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def freeze(self) -> Model:
        """Return a read-only view of the indices."""
        return Model(self._by_id, self._by_type)


class Model:
    """The parsed metamodel: read-only identifier and kind indices."""

    def __init__(self, elements_by_id: dict[str, Element], elements_by_type: dict[str, list[Element]]) -> None:
        self._elements_by_id = MappingProxyType(elements_by_id)
        self._elements_by_type = MappingProxyType(elements_by_type)

    @property
    def elements_by_id(self) -> Mapping[str, Element]:
        """Identifier to element."""
        return self._elements_by_id

    @property
    def elements_by_type(self) -> Mapping[str, list[Element]]:
        """Kind name (for example ``cmof:Class``) to elements in document order."""
        return self._elements_by_type

    @property
    def packages(self) -> list[Package]:
        """All packages of the model in document order."""
        return [e for e in self._elements_by_id.values() if isinstance(e, Package)]

    def of_type(self, kind: str) -> list[Element]:
        """Return the elements of *kind*, or an empty list."""
        return list(self._elements_by_type.get(kind, []))

    def find(self, kind: str, name: str) -> Element | None:
        """Return the first element of *kind* named *name*."""
        return next((e for e in self._elements_by_type.get(kind, []) if e.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        """Return both indices as plain mappings of serialized elements."""
        return {
            "elementsById": {key: element.to_dict() for key, element in self._elements_by_id.items()},
            "elementsByType": {
                kind: [element.to_dict() for element in elements] for kind, elements in self._elements_by_type.items()
            },
        }
