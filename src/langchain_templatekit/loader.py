"""Directory-backed template discovery and inheritance-chain resolution."""

from __future__ import annotations

import logging
from pathlib import Path

from langchain_templatekit.errors import TemplateCycleError, TemplateNotFoundError
from langchain_templatekit.types import DEFAULT_PARENT_KEY, Template

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".md"


class TemplateLoader:
    """Finds markdown templates by name across one or more directories.

    A template's name is its file stem. Templates name their parent with
    the ``extends`` frontmatter key (configurable via *parent_key*)::

        ---
        extends: base
        delete: [author]
        category: blog
        ---

    Args:
        templates_dirs: A single directory path or list of directory paths.
        parent_key: Frontmatter key holding the parent template's name.
    """

    def __init__(
        self,
        templates_dirs: str | Path | list[str | Path],
        *,
        parent_key: str = DEFAULT_PARENT_KEY,
    ) -> None:
        if isinstance(templates_dirs, (str, Path)):
            templates_dirs = [templates_dirs]
        self.templates_dirs = [Path(d) for d in templates_dirs if d]
        self.parent_key = parent_key

    def _build_index(self) -> dict[str, Path]:
        """Map template name to file path. First directory wins on collisions."""
        index: dict[str, Path] = {}
        for templates_dir in self.templates_dirs:
            if not templates_dir.is_dir():
                continue
            for path in sorted(templates_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
                if not path.is_file():
                    continue
                if path.stem in index:
                    logger.debug(
                        "Template '%s' at %s shadowed by %s", path.stem, path, index[path.stem]
                    )
                    continue
                index[path.stem] = path
        return index

    def list_templates(self) -> list[str]:
        return sorted(self._build_index())

    def find(self, name: str) -> Path | None:
        """Return the file for template *name*, or ``None``."""
        return self._build_index().get(name.removesuffix(TEMPLATE_SUFFIX))

    def load(self, name: str) -> Template:
        """Load a single template by name.

        Raises:
            TemplateNotFoundError: If no template is called *name*.
            FrontmatterParseError: If its frontmatter is malformed.
        """
        path = self.find(name)
        if path is None:
            available = self.list_templates()
            raise TemplateNotFoundError(
                f"Template '{name}' not found. "
                f"Available templates: {', '.join(available) or 'none'}"
            )
        return Template.from_file(path, parent_key=self.parent_key)

    def resolve_chain(self, name: str) -> list[Template]:
        """Return the inheritance chain ending at *name*, ordered root to leaf.

        Raises:
            TemplateNotFoundError: If *name* or any ancestor is missing.
            TemplateCycleError: If the chain loops back on itself.
            FrontmatterParseError: If any template in the chain is malformed.
        """
        chain: list[Template] = []
        seen: list[str] = []
        current: str | None = name.removesuffix(TEMPLATE_SUFFIX)

        while current is not None:
            if current in seen:
                cycle = " -> ".join([*seen, current])
                raise TemplateCycleError(f"Template inheritance cycle: {cycle}")
            seen.append(current)
            try:
                template = self.load(current)
            except TemplateNotFoundError:
                if len(seen) == 1:
                    raise
                raise TemplateNotFoundError(
                    f"Template '{seen[-2]}' extends missing template '{current}'"
                ) from None
            chain.append(template)
            current = template.parent

        chain.reverse()
        logger.debug("Resolved template chain for '%s': %s", name, [t.name for t in chain])
        return chain
