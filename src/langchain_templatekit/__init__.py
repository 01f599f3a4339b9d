"""Template inheritance for markdown frontmatter, with a LangChain toolkit.

Two paths to use:

**Library** — merge a chain of templates yourself::

    from langchain_templatekit import TemplateApplicator, TemplateLoader

    applicator = TemplateApplicator(TemplateLoader("Templates/"))
    note = applicator.render("meeting", title="Weekly sync")

Templates extend a parent with ``extends`` and drop inherited keys with
``delete``::

    ---
    extends: base
    delete: [author, tags]
    category: blog
    ---

**Agent** — use ``TemplateKit`` as a standard LangChain toolkit::

    from langchain_templatekit import TemplateKit

    kit = TemplateKit("Templates/")
    tools = [web_search] + kit.get_tools()
"""

from langchain_templatekit.applicator import TemplateApplicator, merge_templates
from langchain_templatekit.errors import (
    FrontmatterParseError,
    MalformedDeleteListError,
    TemplateChainError,
    TemplateCycleError,
    TemplateKitError,
    TemplateNotFoundError,
)
from langchain_templatekit.loader import TemplateLoader
from langchain_templatekit.template_kit import TemplateKit
from langchain_templatekit.types import AppliedNote, MergeOptions, ResolvedDocument, Template

__all__ = [
    "TemplateKit",
    "TemplateApplicator",
    "TemplateLoader",
    "merge_templates",
    "Template",
    "ResolvedDocument",
    "AppliedNote",
    "MergeOptions",
    "TemplateKitError",
    "FrontmatterParseError",
    "MalformedDeleteListError",
    "TemplateNotFoundError",
    "TemplateChainError",
    "TemplateCycleError",
]
