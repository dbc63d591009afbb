# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for parsed metamodels.

Parsing is lenient: a reference that does not resolve is kept as written and
treated as naming a primitive or an element of another document. These checks
run on the resolved model and report what a stricter reading would reject.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mofxmi.model.elements import Classifier, Property
from mofxmi.model.registry import Model
from mofxmi.model.types import primitive_type_names

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal inconsistency detected during validation.

    The model is usable, but a reference could not be confirmed.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal inconsistency detected during validation.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running validation checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that indicate an unusable metamodel.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(model: Model) -> ValidationResult:
    """Run all consistency checks on a parsed model.

    Checks performed:

    1. **Unresolved references** (warning): A property type or superclass
       that is neither the name of a parsed element, a primitive type, nor a
       namespace-qualified name (``dc:Bounds``, ``DC.cmof#Bounds``).

    2. **Untyped properties** (warning): Owned attributes without a type.

    3. **Inheritance cycles** (error): A classifier that, following its
       superclasses, inherits from itself.

    Args:
        model: The model returned by the parser.

    Returns:
        A :class:`ValidationResult`. An empty result indicates a fully
        consistent model.
    """
    classifiers = [e for e in model.elements_by_id.values() if isinstance(e, Classifier)]
    known_names = {e.name for e in model.elements_by_id.values() if e.name} | _PRIMITIVE_TYPE_NAMES

    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    warnings.extend(_check_references(classifiers, known_names))
    warnings.extend(_check_untyped_properties(classifiers))
    errors.extend(_check_inheritance_cycles(classifiers))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################

_PRIMITIVE_TYPE_NAMES = primitive_type_names()


def _label(classifier: Classifier) -> str:
    return classifier.name or classifier.id or "<anonymous>"


def _property_label(classifier: Classifier, prop: Property) -> str:
    return f"{_label(classifier)}.{prop.name or '<anonymous>'}"


def _is_resolved(reference: str, known_names: set[str]) -> bool:
    return reference in known_names or ":" in reference or "#" in reference


def _detect_cycle(graph: dict[str, list[str]]) -> list[str] | None:
    """Detect a cycle in a directed graph using DFS.

    Uses a three-colour marking scheme (white/grey/black) to distinguish
    unvisited, in-progress, and fully-explored nodes.

    Returns:
        A list of node names forming the cycle with the start node repeated
        at the end (e.g. ``["A", "B", "A"]``), or ``None`` if the graph is
        acyclic.
    """
    WHITE, GREY, BLACK = 0, 1, 2
    color: dict[str, int] = {}
    path: list[str] = []

    def _dfs(node: str) -> list[str] | None:
        color[node] = GREY
        path.append(node)
        for neighbor in graph.get(node, []):
            state = color.get(neighbor, WHITE)
            if state == GREY:
                cycle_start = path.index(neighbor)
                return path[cycle_start:] + [neighbor]
            if state == WHITE:
                result = _dfs(neighbor)
                if result is not None:
                    return result
        path.pop()
        color[node] = BLACK
        return None

    for node in graph:
        if color.get(node, WHITE) == WHITE:
            result = _dfs(node)
            if result is not None:
                return result
    return None


def _check_references(classifiers: list[Classifier], known_names: set[str]) -> list[ValidationWarning]:
    """Return warnings for property types and superclasses that resolve nowhere."""
    warnings: list[ValidationWarning] = []
    for classifier in classifiers:
        for super_name in classifier.super_class or []:
            if not _is_resolved(super_name, known_names):
                warnings.append(
                    ValidationWarning(
                        message=f"Classifier '{_label(classifier)}' has unresolved superclass '{super_name}'."
                    )
                )
        for prop in classifier.properties or []:
            if isinstance(prop.type, str) and not _is_resolved(prop.type, known_names):
                warnings.append(
                    ValidationWarning(
                        message=f"Property '{_property_label(classifier, prop)}' has unresolved type '{prop.type}'."
                    )
                )
    return warnings


def _check_untyped_properties(classifiers: list[Classifier]) -> list[ValidationWarning]:
    """Return warnings for owned attributes that declare no type."""
    return [
        ValidationWarning(message=f"Property '{_property_label(classifier, prop)}' has no type.")
        for classifier in classifiers
        for prop in classifier.properties or []
        if prop.type is None
    ]


def _check_inheritance_cycles(classifiers: list[Classifier]) -> list[ValidationError]:
    """Return an error for the first inheritance cycle among named classifiers."""
    graph: dict[str, list[str]] = {}
    for classifier in classifiers:
        if classifier.name:
            graph.setdefault(classifier.name, []).extend(classifier.super_class or [])
    cycle = _detect_cycle(graph)
    if cycle is None:
        return []
    return [ValidationError(message=f"Inheritance cycle detected: {' -> '.join(cycle)}.")]
