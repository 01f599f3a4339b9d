"""Validation utilities for langchain-templatekit."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_templatekit.merger import delete_list_problem
from langchain_templatekit.variables import find_unknown_variables

if TYPE_CHECKING:
    from langchain_templatekit.types import Template


def validate_template(template: Template) -> list[str]:
    """Check a template for problems that would not stop it from merging.

    Returns a list of error messages. An empty list means valid.
    """
    errors: list[str] = []
    label = template.name or "<template>"

    problem = delete_list_problem(template.metadata)
    if problem is not None:
        errors.append(f"Template '{label}': {problem}")

    unknown = find_unknown_variables(template.body)
    for value in template.metadata.values():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if isinstance(item, str):
                unknown.extend(v for v in find_unknown_variables(item) if v not in unknown)
    if unknown:
        names = ", ".join(f"{{{{{name}}}}}" for name in unknown)
        errors.append(
            f"Template '{label}' uses unknown variables that will be left unchanged: {names}"
        )

    if template.parent and template.parent == template.name:
        errors.append(f"Template '{label}' extends itself")

    return errors
