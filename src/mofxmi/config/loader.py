# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the parser configuration file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mofxmi.parser.context import ParseOptions

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".mofxmi.yaml"


class ParserConfigError(Exception):
    """Raised when a parser configuration file is invalid or cannot be loaded."""


class ParserConfig(BaseModel):
    """Parser settings shared by all documents of a project.

    Attributes:
        clean: Strip bookkeeping fields from parsed elements.
        strict: Reject malformed markup.
        prefix_namespaces: Raw namespace or file prefix to canonical short prefix.
        output_directory: Directory for JSON artifacts, relative to the config file.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    clean: bool = False
    strict: bool = True
    prefix_namespaces: dict[str, str] | None = Field(alias="prefix-namespaces", default=None)
    output_directory: str | None = Field(alias="output-directory", default=None)

    def to_parse_options(self) -> ParseOptions:
        """Return the options to hand to the parser."""
        return ParseOptions(clean=self.clean, strict=self.strict, prefix_namespaces=self.prefix_namespaces)


def load_parser_config(path: Path) -> ParserConfig:
    """Load and validate a parser configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the `.mofxmi.yaml` file.

    Returns:
        A validated ParserConfig instance.

    Raises:
        ParserConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserConfigError(f"Parser config file not found: {path}") from None
    except OSError as exc:
        raise ParserConfigError(f"Cannot read parser config file: {exc}") from exc

    return _parse_parser_config(text, source_label=str(path))


def save_parser_config(config: ParserConfig, path: Path) -> None:
    """Write *config* to *path* in the layout read by :func:`load_parser_config`.

    Raises:
        ParserConfigError: If the file cannot be written.
    """
    data = config.model_dump(by_alias=True, exclude_none=True)
    try:
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise ParserConfigError(f"Cannot write parser config file '{path}': {exc}") from exc


# ################
# Implementation
# ################


def _parse_parser_config(text: str, source_label: str = "<string>") -> ParserConfig:
    """Parse configuration YAML text into a ParserConfig.

    Raises:
        ParserConfigError: If the YAML is invalid or violates the schema.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ParserConfigError(f"{source_label}: parser config must be a YAML mapping")

    try:
        return ParserConfig.model_validate(data)
    except ValidationError as exc:
        raise ParserConfigError(f"Invalid parser config {source_label}: {exc}") from exc
