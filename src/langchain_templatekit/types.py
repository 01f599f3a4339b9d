"""Data types for templates and resolved documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from langchain_templatekit.errors import TemplateChainError
from langchain_templatekit.frontmatter import FrontmatterResult, parse_frontmatter, split_frontmatter
from langchain_templatekit.variables import DEFAULT_DATE_FORMAT, DEFAULT_TIME_FORMAT

DEFAULT_PARENT_KEY = "extends"


@dataclass(frozen=True)
class MergeOptions:
    """Settings shared by the loader, applicator and toolkit.

    Fields:
        strict_delete_lists: Raise on a malformed ``delete`` list instead of
            logging a warning and ignoring it.
        parent_key: Frontmatter key naming the template a template extends.
        date_format: ``strftime`` format for ``{{date}}``.
        time_format: ``strftime`` format for ``{{time}}``.
    """

    strict_delete_lists: bool = False
    parent_key: str = DEFAULT_PARENT_KEY
    date_format: str = DEFAULT_DATE_FORMAT
    time_format: str = DEFAULT_TIME_FORMAT


@dataclass(frozen=True)
class Template:
    """One link of an inheritance chain: frontmatter plus body.

    ``metadata`` never contains the parent key; it is lifted into ``parent``.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    name: str = ""
    parent: str | None = None
    path: Path | None = None

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "",
        parent_key: str = DEFAULT_PARENT_KEY,
        path: Path | None = None,
    ) -> Template:
        """Parse a template from markdown *text*.

        Raises:
            FrontmatterParseError: If the frontmatter is malformed.
            TemplateChainError: If the parent reference is not a string.
        """
        result = split_frontmatter(text, source=str(path) if path else name or None)
        return cls._from_result(result, name=name, parent_key=parent_key, path=path)

    @classmethod
    def from_file(cls, path: Path, *, parent_key: str = DEFAULT_PARENT_KEY) -> Template:
        """Parse a template file. Its name is the file stem.

        Raises:
            FileNotFoundError: If *path* does not exist.
            FrontmatterParseError: If the frontmatter is malformed.
            TemplateChainError: If the parent reference is not a string.
        """
        path = Path(path)
        result = parse_frontmatter(path)
        return cls._from_result(result, name=path.stem, parent_key=parent_key, path=path)

    @classmethod
    def _from_result(
        cls,
        result: FrontmatterResult,
        *,
        name: str,
        parent_key: str,
        path: Path | None,
    ) -> Template:
        metadata = dict(result.metadata)
        parent = metadata.pop(parent_key, None)
        if parent is not None:
            if not isinstance(parent, str) or not parent.strip():
                raise TemplateChainError(
                    f"Template '{name}' has an invalid '{parent_key}' value: {parent!r}"
                )
            parent = parent.strip().removesuffix(".md")

        return cls(
            metadata=metadata,
            body=result.content,
            name=name,
            parent=parent,
            path=path,
        )


@dataclass(frozen=True)
class ResolvedDocument:
    """Merged frontmatter and body for a document built from a template chain.

    Fields:
        metadata: Resolved frontmatter, never containing ``delete``.
        body: The leaf template's body.
        warnings: Non-fatal problems found while merging.
        chain: Template names merged, root to leaf.
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    warnings: tuple[str, ...] = ()
    chain: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppliedNote:
    """Result of applying a template to an existing note.

    Fields:
        content: The full note text after applying the template.
        conflicts: Template keys the note already had; the note's values were kept.
        added: Template keys added to the note's frontmatter.
        warnings: Non-fatal problems found while merging the template chain.
    """

    content: str
    conflicts: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
