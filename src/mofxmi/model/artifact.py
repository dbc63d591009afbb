# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON export of a parsed metamodel.

Artifacts are consumed by downstream schema and code generators. The format
is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mofxmi.model.registry import Model

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"
ARTIFACT_SUFFIX = ".mofxmi.json"


def serialize(model: Model, *, indent: int | None = None) -> str:
    """Serialize a model to a JSON string.

    Args:
        model: The parsed model.
        indent: Indentation width for pretty output; compact when ``None``.
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(_model_to_dict(model), indent=indent, separators=separators)


def read_artifact_data(path: Path) -> dict[str, Any]:
    """Read an artifact written by :func:`write_artifact` as plain data.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(path.read_text(encoding="utf-8"))
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return obj


def write_artifact(model: Model, path: Path, *, indent: int | None = None) -> None:
    """Write a model artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(model, indent=indent), encoding="utf-8")


def artifact_path(source: Path, output_dir: Path) -> Path:
    """Return the artifact path for *source* inside *output_dir*."""
    return output_dir / (source.stem + ARTIFACT_SUFFIX)


# ################
# Implementation
# ################


def _model_to_dict(model: Model) -> dict[str, Any]:
    return {"v": ARTIFACT_FORMAT_VERSION, **model.to_dict()}
