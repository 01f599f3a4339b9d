"""Template chain application.

Resolves a root-to-leaf chain of templates into one document. Each step is
a pure transition ``(state, template) -> state`` folded over the chain::

    from langchain_templatekit import Template, merge_templates

    doc = merge_templates([
        Template({"author": "John", "tags": ["base"]}),
        Template({"delete": ["author"], "category": "blog"}),
        Template({"tags": ["specific"]}, body="Hello"),
    ])
    doc.metadata  # {"tags": ["base", "specific"], "category": "blog"}

A key listed under ``delete`` is excluded from the step that lists it and
every later step, until a later template defines it again.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import partial, reduce
from typing import Any

from langchain_templatekit.frontmatter import render_document, split_frontmatter
from langchain_templatekit.loader import TemplateLoader
from langchain_templatekit.merger import (
    apply_delete_list,
    delete_list_problem,
    extract_delete_list,
    merge_frontmatter,
    merge_into_existing,
    strip_reserved_keys,
)
from langchain_templatekit.types import AppliedNote, MergeOptions, ResolvedDocument, Template
from langchain_templatekit.variables import VariableContext, find_variables, substitute_variables


@dataclass(frozen=True)
class MergeState:
    """Accumulated metadata and exclusions after some prefix of the chain."""

    metadata: dict[str, Any] = field(default_factory=dict)
    exclusions: frozenset[str] = frozenset()
    warnings: tuple[str, ...] = ()


def merge_step(state: MergeState, template: Template, *, strict: bool = False) -> MergeState:
    """Fold one template into *state*.

    Raises:
        MalformedDeleteListError: If *strict* and the template's ``delete``
            value is not a list of strings.
    """
    source = template.name or None
    explicit_keys = frozenset(template.metadata)

    warnings = state.warnings
    problem = delete_list_problem(template.metadata)
    if problem is not None and not strict:
        warnings = (*warnings, f"{source}: {problem}" if source else problem)

    deletes = extract_delete_list(template.metadata, strict=strict, source=source)
    exclusions = state.exclusions | deletes

    merged = merge_frontmatter(state.metadata, template.metadata)
    metadata = strip_reserved_keys(apply_delete_list(merged, exclusions, explicit_keys))

    return MergeState(
        metadata=metadata,
        exclusions=exclusions - explicit_keys,
        warnings=warnings,
    )


def merge_templates(
    templates: Sequence[Template],
    *,
    options: MergeOptions | None = None,
) -> ResolvedDocument:
    """Merge a root-to-leaf chain into a single document.

    The leaf's body becomes the document body. An empty chain resolves to
    an empty document.
    """
    if not templates:
        return ResolvedDocument()

    options = options or MergeOptions()
    step = partial(merge_step, strict=options.strict_delete_lists)
    state = reduce(step, templates, MergeState())

    return ResolvedDocument(
        metadata=state.metadata,
        body=templates[-1].body,
        warnings=state.warnings,
        chain=tuple(t.name for t in templates),
    )


def _iter_strings(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_strings(item)


def _substitute_value(value: Any, context: VariableContext) -> Any:
    if isinstance(value, str):
        return substitute_variables(value, context)
    if isinstance(value, (list, tuple)):
        return [_substitute_value(item, context) for item in value]
    return value


def substitute_document(
    document: ResolvedDocument,
    *,
    title: str,
    now: datetime | None = None,
    options: MergeOptions | None = None,
) -> ResolvedDocument:
    """Fill template variables in the body and in string metadata values.

    One context is shared by the whole document, so every
    ``{{snowflake_id}}`` receives the same id.
    """
    options = options or MergeOptions()
    texts = [document.body]
    for value in document.metadata.values():
        texts.extend(_iter_strings(value))
    uses_id = any("snowflake_id" in find_variables(text) for text in texts)

    context = VariableContext.build(
        title,
        now=now,
        date_format=options.date_format,
        time_format=options.time_format,
        with_id=uses_id,
    )
    return replace(
        document,
        metadata={k: _substitute_value(v, context) for k, v in document.metadata.items()},
        body=substitute_variables(document.body, context),
    )


class TemplateApplicator:
    """Resolves named templates from a loader and renders or updates notes.

    Example::

        applicator = TemplateApplicator(TemplateLoader("Templates/"))
        text = applicator.render("meeting", title="Weekly sync")

    Args:
        loader: Source of templates for :meth:`resolve`, :meth:`apply`,
            :meth:`render` and :meth:`apply_to`. Not needed for :meth:`merge_templates`.
        options: Merge and variable settings.
    """

    def __init__(
        self,
        loader: TemplateLoader | None = None,
        options: MergeOptions | None = None,
    ) -> None:
        self.options = options or MergeOptions()
        self.loader = loader

    def merge_templates(self, templates: Sequence[Template]) -> ResolvedDocument:
        return merge_templates(templates, options=self.options)

    def resolve(self, name: str) -> ResolvedDocument:
        """Load the chain ending at *name* and merge it.

        Raises:
            ValueError: If the applicator has no loader.
            TemplateNotFoundError: If a template in the chain is missing.
            TemplateChainError: If the chain is invalid or cyclic.
            FrontmatterParseError: If a template in the chain is malformed.
        """
        if self.loader is None:
            raise ValueError("TemplateApplicator has no loader to resolve templates from")
        return self.merge_templates(self.loader.resolve_chain(name))

    def apply(self, name: str, *, title: str, now: datetime | None = None) -> ResolvedDocument:
        """Resolve *name* and fill in template variables for a note called *title*."""
        return substitute_document(self.resolve(name), title=title, now=now, options=self.options)

    def render(self, name: str, *, title: str, now: datetime | None = None) -> str:
        """Return the markdown text of a new note built from template *name*."""
        document = self.apply(name, title=title, now=now)
        return render_document(document.metadata, document.body)

    def apply_to(
        self,
        existing_text: str,
        name: str,
        *,
        title: str,
        now: datetime | None = None,
    ) -> AppliedNote:
        """Apply template *name* to the existing note *existing_text*.

        Frontmatter values already in the note win over the template's; keys
        only the template has are added. The template body is appended after
        the note's body.

        Raises:
            FrontmatterParseError: If the note or a template is malformed.
        """
        document = self.apply(name, title=title, now=now)
        note = split_frontmatter(existing_text, source=title)

        metadata, conflicts, added = merge_into_existing(note.metadata, document.metadata)

        if not document.body:
            body = note.content
        elif not note.content:
            body = document.body
        else:
            body = f"{note.content}\n\n{document.body}"

        return AppliedNote(
            content=render_document(metadata, body),
            conflicts=tuple(conflicts),
            added=tuple(added),
            warnings=document.warnings,
        )
