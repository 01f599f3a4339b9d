"""Exceptions raised by langchain-templatekit."""

from __future__ import annotations


class TemplateKitError(Exception):
    """Base exception for template loading and merging."""


class FrontmatterParseError(TemplateKitError, ValueError):
    """Raised when a front-matter block is not well-formed YAML.

    ``source`` names the template or file that failed to parse, when known.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class MalformedDeleteListError(TemplateKitError, ValueError):
    """Raised for a malformed ``delete`` list when strict checking is enabled."""


class TemplateNotFoundError(TemplateKitError, LookupError):
    """Raised when a template name does not resolve to a file."""


class TemplateChainError(TemplateKitError):
    """Raised when a template's inheritance chain cannot be resolved."""


class TemplateCycleError(TemplateChainError):
    """Raised when templates extend each other in a cycle."""
