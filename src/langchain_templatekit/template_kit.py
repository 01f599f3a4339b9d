"""TemplateKit — toolkit exposing template rendering to LangGraph agents.

Usage::

    from langchain_templatekit import TemplateKit

    # Single directory
    kit = TemplateKit("Templates/")

    # Multiple directories, first one wins on name collisions
    kit = TemplateKit(["Templates/", "shared_templates/"])

    tools = kit.get_tools()  # → [Template, TemplateInspect]

The ``Template`` tool returns a rendered markdown note as a plain string.
The ``TemplateInspect`` tool shows a template's inheritance chain and its
resolved frontmatter.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from langchain_core.tools import (
    BaseTool,
    BaseToolkit,
    StructuredTool,
    ToolException,
)
from pydantic import BaseModel, Field

from langchain_templatekit.applicator import TemplateApplicator, merge_templates
from langchain_templatekit.errors import TemplateKitError
from langchain_templatekit.frontmatter import render_frontmatter
from langchain_templatekit.loader import TemplateLoader
from langchain_templatekit.types import MergeOptions

TEMPLATE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 _.-]{0,127}$")


class TemplateInput(BaseModel):
    """Input schema for the Template tool."""

    template_name: str = Field(description="Name of the template to apply (e.g. 'meeting')")
    title: str = Field(description="Title of the new note, substituted for {{title}}")


class TemplateInspectInput(BaseModel):
    """Input schema for the TemplateInspect tool."""

    template_name: str = Field(description="Name of the template to inspect")


class TemplateKit(BaseToolkit):
    """Toolkit providing ``Template`` and ``TemplateInspect`` tools.

    Scans one or more directories for markdown templates. Templates may
    extend each other through the ``extends`` frontmatter key and drop
    inherited keys with a ``delete`` list.

    Example::

        from langchain_templatekit import TemplateKit

        kit = TemplateKit("Templates/")
        bound_llm = llm.bind_tools([web_search] + kit.get_tools())

    Args:
        templates_dirs: A single directory path or list of directory paths
            containing template files.
        options: Merge and variable settings.
    """

    templates_dirs: list[str]
    options: MergeOptions = Field(default_factory=MergeOptions)

    model_config = {"arbitrary_types_allowed": True}

    def __init__(self, templates_dirs: str | Path | list[str | Path], **kwargs: Any) -> None:
        """Create a TemplateKit from one or more template directories.

        Args:
            templates_dirs: A single path or list of paths to directories
                containing ``.md`` templates.
        """
        if isinstance(templates_dirs, (str, Path)):
            dirs = [str(templates_dirs)]
        else:
            dirs = [str(d) for d in templates_dirs]
        super().__init__(templates_dirs=dirs, **kwargs)  # type: ignore[call-arg]

    def get_tools(self) -> list[BaseTool]:
        """Return the toolkit's tools: Template and TemplateInspect."""
        return [
            self._build_template_tool(),
            self._build_inspect_tool(),
        ]

    def _loader(self) -> TemplateLoader:
        return TemplateLoader(self.templates_dirs, parent_key=self.options.parent_key)

    def _validate_template_name(self, template_name: str) -> None:
        if not TEMPLATE_NAME_PATTERN.match(template_name):
            available = self._loader().list_templates()
            raise ToolException(
                f"Invalid template name '{template_name}'. "
                f"Available templates: {', '.join(available) or 'none'}"
            )

    def _require_template(self, loader: TemplateLoader, template_name: str) -> None:
        if loader.find(template_name) is None:
            available = loader.list_templates()
            raise ToolException(
                f"Template '{template_name}' not found. "
                f"Available templates: {', '.join(available) or 'none'}"
            )

    def _build_available_templates_description(self) -> str:
        """Build ``<available_templates>`` XML block from all template directories."""
        names = self._loader().list_templates()
        if not names:
            return ""

        entries = [f"<template>{name}</template>" for name in names]
        return "\n\n<available_templates>\n" + "\n".join(entries) + "\n</available_templates>"

    def _build_template_tool(self) -> StructuredTool:
        base_description = (
            "Create the content of a new markdown note from a template. "
            "Returns the note text with frontmatter; template variables such as "
            "{{title}} and {{date}} are filled in."
        )
        description = base_description + self._build_available_templates_description()

        def template(template_name: str, title: str) -> str:
            """Render a new note from a template."""
            self._validate_template_name(template_name)
            loader = self._loader()
            self._require_template(loader, template_name)

            applicator = TemplateApplicator(loader, self.options)
            try:
                return applicator.render(template_name, title=title)
            except TemplateKitError as exc:
                raise ToolException(str(exc)) from exc

        return StructuredTool.from_function(
            func=template,
            name="Template",
            description=description,
            args_schema=TemplateInput,
            handle_tool_error=True,
        )

    def _build_inspect_tool(self) -> StructuredTool:
        def template_inspect(template_name: str) -> str:
            """Show a template's inheritance chain and resolved frontmatter."""
            self._validate_template_name(template_name)
            loader = self._loader()
            self._require_template(loader, template_name)

            try:
                document = merge_templates(
                    loader.resolve_chain(template_name), options=self.options
                )
            except TemplateKitError as exc:
                raise ToolException(str(exc)) from exc

            lines = [f"Chain: {' -> '.join(document.chain)}", "", "Frontmatter:"]
            lines.append(render_frontmatter(document.metadata).rstrip("\n") or "(empty)")
            if document.warnings:
                lines.extend(["", "Warnings:", *(f"- {w}" for w in document.warnings)])
            return "\n".join(lines)

        return StructuredTool.from_function(
            func=template_inspect,
            name="TemplateInspect",
            description=(
                "Show which templates a template inherits from (root to leaf) "
                "and the frontmatter it resolves to."
            ),
            args_schema=TemplateInspectInput,
            handle_tool_error=True,
        )
