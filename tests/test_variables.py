"""Tests for template variable substitution."""

from datetime import datetime

from langchain_templatekit.variables import (
    SNOWFLAKE_ID_ALPHABET,
    VariableContext,
    find_unknown_variables,
    find_variables,
    generate_snowflake_id,
    substitute_variables,
)

NOW = datetime(2024, 3, 5, 14, 30)


class TestVariableContext:
    def test_default_formats(self):
        context = VariableContext.build("My Note", now=NOW)

        assert context.title == "My Note"
        assert context.date == "2024-03-05"
        assert context.time == "14:30"
        assert context.snowflake_id is None

    def test_custom_formats(self):
        context = VariableContext.build("x", now=NOW, date_format="%B %d", time_format="%I%p")

        assert context.date == "March 05"
        assert context.time == "02PM"

    def test_empty_format_falls_back_to_default(self):
        context = VariableContext.build("x", now=NOW, date_format="", time_format="")

        assert context.date == "2024-03-05"
        assert context.time == "14:30"

    def test_with_id(self):
        context = VariableContext.build("x", now=NOW, with_id=True)

        assert context.snowflake_id is not None
        assert len(context.snowflake_id) == 10


class TestSubstituteVariables:
    def test_replaces_known_variables(self):
        context = VariableContext.build("Title", now=NOW)

        result = substitute_variables("# {{title}}\n{{date}} {{time}}", context)

        assert result == "# Title\n2024-03-05 14:30"

    def test_all_occurrences_get_same_id(self):
        context = VariableContext.build("x", now=NOW, with_id=True)

        result = substitute_variables("{{snowflake_id}}-{{snowflake_id}}", context)
        first, second = result.split("-")

        assert first == second == context.snowflake_id

    def test_unknown_variables_left_unchanged(self):
        context = VariableContext.build("x", now=NOW)

        assert substitute_variables("{{weather}}", context) == "{{weather}}"

    def test_missing_id_left_unchanged(self):
        context = VariableContext.build("x", now=NOW)

        assert substitute_variables("{{snowflake_id}}", context) == "{{snowflake_id}}"

    def test_malformed_syntax_left_unchanged(self):
        context = VariableContext.build("x", now=NOW)

        assert substitute_variables("{{ title }} {title} {{title", context) == (
            "{{ title }} {title} {{title"
        )


class TestFindVariables:
    def test_unique_in_order(self):
        assert find_variables("{{b}} {{a}} {{b}}") == ["b", "a"]

    def test_unknown(self):
        assert find_unknown_variables("{{title}} {{weather}} {{moon}}") == ["weather", "moon"]


class TestGenerateSnowflakeId:
    def test_length_and_alphabet(self):
        value = generate_snowflake_id()

        assert len(value) == 10
        assert set(value) <= set(SNOWFLAKE_ID_ALPHABET)

    def test_custom_length(self):
        assert len(generate_snowflake_id(4)) == 4
