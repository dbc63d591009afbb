# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the JSON model artifact."""

import json
from pathlib import Path

import pytest

from mofxmi.model.artifact import (
    ARTIFACT_FORMAT_VERSION,
    artifact_path,
    read_artifact_data,
    serialize,
    write_artifact,
)
from mofxmi.model.elements import Classifier, Property
from mofxmi.model.registry import ElementRegistry, Model

# ###############
# Test Helpers
# ###############


def _model() -> Model:
    registry = ElementRegistry()
    flow = Classifier(
        id="SequenceFlow",
        name="SequenceFlow",
        super_class=["FlowElement"],
        properties=[Property(name="sourceRef", type="FlowNode", is_attr=True, is_reference=True)],
    )
    registry.register(flow, "SequenceFlow", "cmof:Class")
    return registry.freeze()


# ###############
# Serialization
# ###############


class TestSerialize:
    def test_compact_by_default(self) -> None:
        text = serialize(_model())
        assert "\n" not in text
        assert ": " not in text

    def test_indent(self) -> None:
        assert "\n  " in serialize(_model(), indent=2)

    def test_layout(self) -> None:
        data = json.loads(serialize(_model()))
        assert data["v"] == ARTIFACT_FORMAT_VERSION
        flow = data["elementsById"]["SequenceFlow"]
        assert flow["superClass"] == ["FlowElement"]
        assert flow["properties"] == [{"name": "sourceRef", "type": "FlowNode", "isAttr": True, "isReference": True}]
        assert data["elementsByType"]["cmof:Class"] == [flow]


# ###############
# Files
# ###############


class TestArtifactFiles:
    def test_write_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "build" / "nested" / "model.mofxmi.json"
        write_artifact(_model(), target)
        assert target.exists()

    def test_read_written_artifact(self, tmp_path: Path) -> None:
        target = tmp_path / "model.mofxmi.json"
        write_artifact(_model(), target, indent=2)
        data = read_artifact_data(target)
        assert list(data["elementsById"]) == ["SequenceFlow"]

    def test_read_rejects_unknown_version(self, tmp_path: Path) -> None:
        target = tmp_path / "model.mofxmi.json"
        target.write_text('{"v": "0", "elementsById": {}, "elementsByType": {}}', encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported artifact format version"):
            read_artifact_data(target)

    def test_artifact_path(self, tmp_path: Path) -> None:
        source = tmp_path / "models" / "BPMN20.cmof"
        assert artifact_path(source, tmp_path / "build") == tmp_path / "build" / "BPMN20.mofxmi.json"
