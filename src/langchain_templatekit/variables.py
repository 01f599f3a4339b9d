"""Template variable substitution.

Supported variables::

    {{title}}         note title (file name without extension)
    {{date}}          current date, ``%Y-%m-%d`` by default
    {{time}}          current time, ``%H:%M`` by default
    {{snowflake_id}}  10-character alphanumeric id, same value per note

Unknown variables are left in place untouched.
"""

from __future__ import annotations

import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime

VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_TIME_FORMAT = "%H:%M"

SNOWFLAKE_ID_LENGTH = 10
SNOWFLAKE_ID_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase

KNOWN_VARIABLES = ("title", "date", "time", "snowflake_id")


def generate_snowflake_id(length: int = SNOWFLAKE_ID_LENGTH) -> str:
    """Return a random alphanumeric id."""
    return "".join(secrets.choice(SNOWFLAKE_ID_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class VariableContext:
    """Values substituted into a single rendered note."""

    title: str
    date: str
    time: str
    snowflake_id: str | None = None

    @classmethod
    def build(
        cls,
        title: str,
        *,
        now: datetime | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
        with_id: bool = False,
    ) -> VariableContext:
        """Build a context for *title* at *now* (defaults to the current time)."""
        now = now or datetime.now()
        return cls(
            title=title,
            date=now.strftime(date_format or DEFAULT_DATE_FORMAT),
            time=now.strftime(time_format or DEFAULT_TIME_FORMAT),
            snowflake_id=generate_snowflake_id() if with_id else None,
        )

    def lookup(self, name: str) -> str | None:
        if name not in KNOWN_VARIABLES:
            return None
        return getattr(self, name)


def find_variables(text: str) -> list[str]:
    """Return variable names used in *text*, unique, in order of appearance."""
    return list(dict.fromkeys(VARIABLE_PATTERN.findall(text)))


def find_unknown_variables(text: str) -> list[str]:
    """Return variable names in *text* that no context can fill."""
    return [name for name in find_variables(text) if name not in KNOWN_VARIABLES]


def substitute_variables(text: str, context: VariableContext) -> str:
    """Replace every known variable in *text* with its value from *context*."""

    def _replace(match: re.Match[str]) -> str:
        value = context.lookup(match.group(1))
        return match.group(0) if value is None else value

    return VARIABLE_PATTERN.sub(_replace, text)
