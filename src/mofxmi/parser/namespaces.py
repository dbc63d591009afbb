# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Canonicalization of namespace-scoped names and metamodel URIs."""

import re
from collections.abc import Mapping

# ###############
# Public Interface
# ###############


def resolve_qualified_name(value: str, prefix_namespaces: Mapping[str, str] | None) -> str:
    """Rewrite ``prefix#Local`` or ``prefix::Local`` into ``canonical:Local``.

    The left segment is looked up in *prefix_namespaces* and kept as written
    when it has no entry. Without a table the value is returned unchanged, as
    is any value that contains no separator.

    Only the first separator is rewritten; later ones stay in the local part,
    so ``A::b::c`` becomes ``canonical:b::c`` rather than ``canonical:b:c``.

    >>> resolve_qualified_name("DC.cmof#Bounds", {"DC.cmof": "dc"})
    'dc:Bounds'
    """
    if prefix_namespaces is None:
        return value
    parts = _SEPARATOR.split(value, maxsplit=1)
    if len(parts) == 1:
        return value
    left, right = parts
    return f"{prefix_namespaces.get(left, left)}:{right}"


def strip_xmi_suffix(uri: str) -> str:
    """Drop a trailing ``-XMI`` marker or the ``.xmi`` extension from a metamodel URI."""
    return _XMI_SUFFIX.sub("", uri, count=1)


# ################
# Implementation
# ################

_SEPARATOR = re.compile(r"#|::")
_XMI_SUFFIX = re.compile(r"-XMI$|\.xmi")
