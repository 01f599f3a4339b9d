"""YAML frontmatter parsing and rendering for markdown templates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from langchain_templatekit.errors import FrontmatterParseError

DELIMITER = "---"


@dataclass(frozen=True)
class FrontmatterResult:
    """Parsed frontmatter metadata and markdown body content."""

    metadata: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_metadata_block(block: str, *, source: str | None = None) -> dict[str, Any]:
    """Parse the text between the ``---`` delimiters into a mapping.

    A block that is valid YAML but not a mapping (a list, a bare scalar,
    nothing at all) parses to an empty mapping.

    Raises:
        FrontmatterParseError: If *block* is not valid YAML.
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontmatterParseError(f"invalid frontmatter: {exc}", source=source) from exc

    if not isinstance(data, dict):
        return {}
    return {str(key): value for key, value in data.items()}


def split_frontmatter(text: str, *, source: str | None = None) -> FrontmatterResult:
    """Split markdown *text* into frontmatter metadata and body content.

    Text that does not open with a ``---`` line has no metadata. An opening
    delimiter without a closing one is an unbalanced block. Delimiters must
    start in the first column, so an indented ``---`` inside a YAML block
    scalar stays part of the block.

    Raises:
        FrontmatterParseError: If the block is unclosed or not valid YAML.
    """
    lines = text.split("\n")
    if lines[0].rstrip() != DELIMITER:
        return FrontmatterResult(metadata={}, content=text.strip())

    end_idx = None
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == DELIMITER:
            end_idx = idx
            break
    if end_idx is None:
        raise FrontmatterParseError("unclosed frontmatter block", source=source)

    metadata = parse_metadata_block("\n".join(lines[1:end_idx]), source=source)
    content = "\n".join(lines[end_idx + 1 :]).strip()

    return FrontmatterResult(metadata=metadata, content=content)


def parse_frontmatter(path: Path) -> FrontmatterResult:
    """Parse a markdown file with optional YAML frontmatter.

    Raises:
        FileNotFoundError: If *path* does not exist.
        FrontmatterParseError: If the file is not UTF-8 or the frontmatter
            is malformed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontmatterParseError(f"not valid UTF-8: {exc}", source=str(path)) from exc
    return split_frontmatter(text, source=str(path))


def render_frontmatter(metadata: Mapping[str, Any]) -> str:
    """Render *metadata* as a YAML block body, keeping key order."""
    if not metadata:
        return ""
    return yaml.safe_dump(
        dict(metadata),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def render_document(metadata: Mapping[str, Any], body: str) -> str:
    """Join rendered frontmatter and *body* into a markdown document."""
    if not metadata:
        return f"{body}\n" if body else ""

    block = f"{DELIMITER}\n{render_frontmatter(metadata)}{DELIMITER}\n"
    if not body:
        return block
    return f"{block}\n{body}\n"
