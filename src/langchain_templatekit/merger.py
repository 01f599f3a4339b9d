"""Frontmatter merge primitives.

Stateless transformations on single metadata mappings. Nothing here knows
about template chains; :mod:`langchain_templatekit.applicator` folds these
over a chain.

Merge rules by value kind::

    base       incoming    result
    SCALAR     SCALAR      incoming
    SEQUENCE   SEQUENCE    base + incoming
    mixed                  incoming
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from langchain_templatekit.errors import MalformedDeleteListError
from langchain_templatekit.frontmatter import parse_metadata_block

logger = logging.getLogger(__name__)

DELETE_KEY = "delete"


class ValueKind(Enum):
    """Shape of a metadata value as far as merging is concerned."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"


def value_kind(value: Any) -> ValueKind:
    """Classify *value*. Only lists and tuples count as sequences."""
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def parse(block_text: str, *, source: str | None = None) -> dict[str, Any]:
    """Parse a raw metadata block into a key/value mapping.

    Raises:
        FrontmatterParseError: If the block is not valid YAML.
    """
    return parse_metadata_block(block_text, source=source)


def delete_list_problem(metadata: Mapping[str, Any]) -> str | None:
    """Describe what is wrong with the ``delete`` value, or return ``None``."""
    value = metadata.get(DELETE_KEY)
    if value is None:
        return None
    if value_kind(value) is ValueKind.SEQUENCE and all(isinstance(item, str) for item in value):
        return None
    return (
        f"'{DELETE_KEY}' must be a list of property names, "
        f"got {type(value).__name__} {value!r}; ignoring it"
    )


def extract_delete_list(
    metadata: Mapping[str, Any],
    *,
    strict: bool = False,
    source: str | None = None,
) -> frozenset[str]:
    """Return the property names listed under ``delete``.

    A missing or null ``delete`` is an empty list. Anything other than a
    sequence of strings is logged and treated as empty.

    Raises:
        MalformedDeleteListError: If *strict* and the value is malformed.
    """
    problem = delete_list_problem(metadata)
    if problem is not None:
        if source:
            problem = f"{source}: {problem}"
        if strict:
            raise MalformedDeleteListError(problem)
        logger.warning(problem)
        return frozenset()

    return frozenset(metadata.get(DELETE_KEY) or ())


def merge_frontmatter(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *incoming* over *base* without touching either.

    Keys only in *base* keep their position; new keys are appended in
    *incoming*'s order.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in incoming.items():
        if (
            key in merged
            and value_kind(merged[key]) is ValueKind.SEQUENCE
            and value_kind(value) is ValueKind.SEQUENCE
        ):
            merged[key] = [*merged[key], *value]
        elif value_kind(value) is ValueKind.SEQUENCE:
            merged[key] = list(value)
        else:
            merged[key] = value
    return merged


def apply_delete_list(
    metadata: Mapping[str, Any],
    exclusions: Iterable[str],
    explicit_keys: Iterable[str],
) -> dict[str, Any]:
    """Drop excluded keys, keeping any the current template defines itself."""
    removable = set(exclusions) - set(explicit_keys)
    return {key: value for key, value in metadata.items() if key not in removable}


def strip_reserved_keys(metadata: Mapping[str, Any]) -> dict[str, Any]:
    """Remove the reserved ``delete`` key."""
    return {key: value for key, value in metadata.items() if key != DELETE_KEY}


def merge_into_existing(
    existing: Mapping[str, Any],
    template: Mapping[str, Any],
) -> tuple[dict[str, Any], list[str], list[str]]:
    """Fill keys missing from a note's *existing* frontmatter from *template*.

    Values already in the note are kept as they are. Returns the merged
    mapping, the template keys the note already had (conflicts) and the
    keys taken from the template (added).
    """
    merged: dict[str, Any] = dict(existing)
    conflicts: list[str] = []
    added: list[str] = []
    for key, value in template.items():
        if key in merged:
            conflicts.append(key)
        else:
            merged[key] = list(value) if value_kind(value) is ValueKind.SEQUENCE else value
            added.append(key)
    return merged, conflicts, added
