# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the identifier and kind indices."""

import pytest

from mofxmi.model.elements import Classifier, Package
from mofxmi.model.registry import ElementRegistry, Model, RegistryError

# ###############
# Test Helpers
# ###############


def _populated() -> tuple[ElementRegistry, Package, Classifier, Classifier]:
    registry = ElementRegistry()
    package = Package(id="_0", name="BPMN20")
    task = Classifier(id="Task", name="Task")
    gateway = Classifier(id="Gateway", name="Gateway")
    registry.register(package, "_0", "cmof:Package")
    registry.register(task, "Task", "cmof:Class")
    registry.register(gateway, "Gateway", "cmof:Class")
    return registry, package, task, gateway


# ###############
# Registration
# ###############


class TestElementRegistry:
    def test_register_and_get(self) -> None:
        registry, package, task, _ = _populated()
        assert registry.get("_0") is package
        assert registry.get("Task") is task
        assert registry.get("Missing") is None

    def test_non_string_keys_never_resolve(self) -> None:
        registry, *_ = _populated()
        assert registry.get(None) is None
        assert registry.get(False) is None
        assert False not in registry

    def test_membership_length_and_order(self) -> None:
        registry, package, task, gateway = _populated()
        assert "Task" in registry
        assert len(registry) == 3
        assert list(registry) == [package, task, gateway]

    def test_duplicate_identifier_raises(self) -> None:
        registry, *_ = _populated()
        with pytest.raises(RegistryError, match="duplicate identifier 'Task'") as exc_info:
            registry.register(Classifier(name="Other"), "Task", "cmof:Class")
        assert exc_info.value.element_id == "Task"

    def test_missing_identifier_raises(self) -> None:
        registry = ElementRegistry()
        with pytest.raises(RegistryError) as exc_info:
            registry.register(Classifier(), None, "cmof:Class")
        assert exc_info.value.element_id is None
        with pytest.raises(RegistryError):
            registry.register(Classifier(), "", "cmof:Class")

    def test_element_without_kind_is_only_indexed_by_identifier(self) -> None:
        registry = ElementRegistry()
        registry.register(Classifier(name="Lit"), "Lit", None)
        model = registry.freeze()
        assert "Lit" in model.elements_by_id
        assert dict(model.elements_by_type) == {}


# ###############
# Frozen Model
# ###############


class TestModel:
    def test_kind_index_preserves_order(self) -> None:
        registry, _, task, gateway = _populated()
        assert registry.freeze().of_type("cmof:Class") == [task, gateway]

    def test_of_unknown_kind_is_empty(self) -> None:
        registry, *_ = _populated()
        assert registry.freeze().of_type("cmof:Association") == []

    def test_find_by_name(self) -> None:
        registry, _, _, gateway = _populated()
        model = registry.freeze()
        assert model.find("cmof:Class", "Gateway") is gateway
        assert model.find("cmof:Class", "Missing") is None

    def test_packages(self) -> None:
        registry, package, *_ = _populated()
        assert registry.freeze().packages == [package]

    def test_indices_are_read_only(self) -> None:
        registry, *_ = _populated()
        model = registry.freeze()
        with pytest.raises(TypeError):
            model.elements_by_id["X"] = Classifier()  # type: ignore[index]
        with pytest.raises(TypeError):
            model.elements_by_type["cmof:Class"] = []  # type: ignore[index]

    def test_to_dict(self) -> None:
        registry, *_ = _populated()
        assert registry.freeze().to_dict() == {
            "elementsById": {
                "_0": {"id": "_0", "name": "BPMN20"},
                "Task": {"id": "Task", "name": "Task"},
                "Gateway": {"id": "Gateway", "name": "Gateway"},
            },
            "elementsByType": {
                "cmof:Package": [{"id": "_0", "name": "BPMN20"}],
                "cmof:Class": [{"id": "Task", "name": "Task"}, {"id": "Gateway", "name": "Gateway"}],
            },
        }

    def test_empty_model(self) -> None:
        model = Model({}, {})
        assert model.packages == []
        assert model.to_dict() == {"elementsById": {}, "elementsByType": {}}
