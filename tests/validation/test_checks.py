# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the metamodel consistency checks."""

from pathlib import Path

from mofxmi.model.elements import Classifier, Property
from mofxmi.model.registry import ElementRegistry, Model
from mofxmi.parser import parse_file
from mofxmi.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

# ###############
# Test Helpers
# ###############

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _model(*classifiers: Classifier) -> Model:
    registry = ElementRegistry()
    for index, classifier in enumerate(classifiers):
        registry.register(classifier, classifier.name or f"_{index}", "cmof:Class")
    return registry.freeze()


def _prop(name: str, type_name: str | None) -> Property:
    return Property(name=name, type=type_name)


def _warnings(result: ValidationResult) -> list[str]:
    return [w.message for w in result.warnings]


def _errors(result: ValidationResult) -> list[str]:
    return [e.message for e in result.errors]


def _assert_clean(model: Model) -> None:
    result = validate(model)
    assert result.warnings == [], f"Expected no warnings but got: {_warnings(result)}"
    assert result.errors == [], f"Expected no errors but got: {_errors(result)}"


def _assert_warning(model: Model, fragment: str) -> None:
    msgs = _warnings(validate(model))
    assert any(fragment in m for m in msgs), f"Expected warning containing {fragment!r} but got: {msgs}"


def _assert_error(model: Model, fragment: str) -> None:
    msgs = _errors(validate(model))
    assert any(fragment in m for m in msgs), f"Expected error containing {fragment!r} but got: {msgs}"


# ###############
# Unresolved References
# ###############


class TestUnresolvedReferences:
    def test_empty_model_is_clean(self) -> None:
        _assert_clean(_model())

    def test_known_superclass_is_clean(self) -> None:
        _assert_clean(_model(Classifier(name="FlowElement"), Classifier(name="FlowNode", super_class=["FlowElement"])))

    def test_unknown_superclass_warns(self) -> None:
        _assert_warning(
            _model(Classifier(name="BPMNLabel", super_class=["Label"])),
            "Classifier 'BPMNLabel' has unresolved superclass 'Label'",
        )

    def test_qualified_superclass_is_treated_as_external(self) -> None:
        _assert_clean(_model(Classifier(name="BPMNShape", super_class=["di:LabeledShape", "DI.cmof#Shape"])))

    def test_unknown_property_type_warns(self) -> None:
        model = _model(Classifier(name="Shape", properties=[_prop("bounds", "Bounds")]))
        _assert_warning(model, "Property 'Shape.bounds' has unresolved type 'Bounds'")

    def test_primitive_property_type_is_clean(self) -> None:
        props = [_prop(name, name) for name in ("Boolean", "Integer", "Real", "String", "Element")]
        _assert_clean(_model(Classifier(name="Values", properties=props)))

    def test_property_type_naming_an_element_is_clean(self) -> None:
        _assert_clean(
            _model(Classifier(name="FlowNode"), Classifier(name="SequenceFlow", properties=[_prop("ref", "FlowNode")]))
        )


# ###############
# Untyped Properties
# ###############


class TestUntypedProperties:
    def test_untyped_property_warns(self) -> None:
        _assert_warning(_model(Classifier(name="Task", properties=[_prop("loop", None)])), "'Task.loop' has no type")

    def test_anonymous_owner_is_labelled(self) -> None:
        owner = Classifier(id="_7", properties=[_prop("loop", None)])
        _assert_warning(_model(owner), "'_7.loop' has no type")


# ###############
# Inheritance Cycles
# ###############


class TestInheritanceCycles:
    def test_direct_cycle_is_an_error(self) -> None:
        model = _model(Classifier(name="A", super_class=["B"]), Classifier(name="B", super_class=["A"]))
        _assert_error(model, "Inheritance cycle detected: A -> B -> A")
        assert validate(model).has_errors

    def test_self_inheritance_is_an_error(self) -> None:
        _assert_error(_model(Classifier(name="A", super_class=["A"])), "A -> A")

    def test_diamond_is_not_a_cycle(self) -> None:
        model = _model(
            Classifier(name="Base"),
            Classifier(name="Left", super_class=["Base"]),
            Classifier(name="Right", super_class=["Base"]),
            Classifier(name="Both", super_class=["Left", "Right"]),
        )
        assert not validate(model).has_errors


# ###############
# Parsed Documents
# ###############


class TestParsedDocuments:
    def test_consistent_cmof_document(self) -> None:
        _assert_clean(parse_file(FIXTURES / "cmof" / "bpmn_subset.cmof"))

    def test_consistent_uml_document(self) -> None:
        _assert_clean(parse_file(FIXTURES / "xmi" / "dc_subset.xmi"))

    def test_cross_document_references_are_external(self) -> None:
        prefixes = {"BPMN20.cmof": "bpmn", "DC.cmof": "dc", "DI.cmof": "di"}
        result = validate(parse_file(FIXTURES / "cmof" / "bpmndi_subset.cmof", prefix_namespaces=prefixes))
        assert _warnings(result) == ["Classifier 'BPMNLabel' has unresolved superclass 'Label'."]
        assert result.errors == []


class TestResultTypes:
    def test_result_defaults(self) -> None:
        result = ValidationResult()
        assert result.warnings == []
        assert not result.has_errors

    def test_messages(self) -> None:
        assert ValidationWarning(message="w").message == "w"
        assert ValidationError(message="e").message == "e"
