# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Options and per-parse state threaded through every tag handler."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from mofxmi.model.registry import ElementRegistry
from mofxmi.model.types import Dialect

# ###############
# Public Interface
# ###############


class ParseOptions(BaseModel):
    """Caller-supplied parse configuration.

    Attributes:
        clean: Strip bookkeeping fields (raw bounds, aggregation markers,
            identifiers of indexed elements) from the resulting elements.
        strict: Reject malformed markup; when ``False`` the tokenizer recovers.
        prefix_namespaces: Raw namespace or file prefix (``DC.cmof``) to
            canonical short prefix (``dc``). ``None`` disables canonicalization.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    clean: bool = False
    strict: bool = True
    prefix_namespaces: dict[str, str] | None = _Field(default=None)


@dataclass
class ParseContext:
    """Mutable state of a single parse.

    Created fresh for every document and discarded once the model is
    returned; nothing here is shared between parses.
    """

    options: ParseOptions
    registry: ElementRegistry = field(default_factory=ElementRegistry)
    dialect: Dialect | None = None

    @property
    def clean(self) -> bool:
        return self.options.clean

    @property
    def prefix_namespaces(self) -> dict[str, str] | None:
        return self.options.prefix_namespaces
