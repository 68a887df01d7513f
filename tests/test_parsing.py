"""Tests for completion parsing and the tagged result types."""

import json

import pytest

from services.errors import ServiceUnavailableError
from services.parsing import (
    Degraded,
    Err,
    Ok,
    parse_category,
    parse_grammar,
    parse_improvement,
    parse_tags,
    parse_text,
    parse_titles,
    unwrap,
)


class TestTags:
    def test_lowercases_trims_and_truncates_in_order(self):
        outcome = parse_tags('Here are tags: ["react", "Node.js", "Web-Dev"]', max_tags=2)
        assert outcome == Ok(["react", "node.js"])

    def test_strips_whitespace(self):
        assert parse_tags('["  Python ", "APIs"]').value == ["python", "apis"]

    def test_json_in_code_block(self):
        completion = '```json\n["flask", "testing"]\n```'
        assert parse_tags(completion).value == ["flask", "testing"]

    def test_no_array_degrades_to_empty(self):
        outcome = parse_tags("python, flask, testing")
        assert isinstance(outcome, Degraded)
        assert outcome.value == []

    def test_malformed_array_degrades_to_empty(self):
        outcome = parse_tags('["python", "flask",]')
        assert isinstance(outcome, Degraded)
        assert outcome.value == []

    def test_non_string_entries_are_dropped(self):
        assert parse_tags('["python", 3, null, "flask"]').value == ["python", "flask"]


class TestTitles:
    def test_keeps_case_and_truncates(self):
        completion = json.dumps(["Mastering React", "Hooks 101", "Why Hooks Win"])
        assert parse_titles(completion, count=2) == Ok(["Mastering React", "Hooks 101"])

    def test_failure_degrades_to_empty(self):
        outcome = parse_titles("1. Mastering React\n2. Hooks 101")
        assert isinstance(outcome, Degraded)
        assert outcome.value == []


class TestImprovement:
    def test_valid_object(self):
        completion = 'Sure! {"improved": "Better text.", "changes": ["Fixed grammar", "Tightened"]}'
        outcome = parse_improvement(completion, "bad text")
        assert outcome == Ok({"improved": "Better text.", "changes": ["Fixed grammar", "Tightened"],
                              "degraded": False})

    def test_missing_object_echoes_original(self):
        outcome = parse_improvement("Here is your improved text: Better text.", "bad text")
        assert isinstance(outcome, Degraded)
        assert outcome.value == {"improved": "bad text", "changes": [], "degraded": True}

    def test_object_without_improved_field_echoes_original(self):
        outcome = parse_improvement('{"text": "Better"}', "bad text")
        assert outcome.value["improved"] == "bad text"

    def test_non_list_changes_become_empty(self):
        outcome = parse_improvement('{"improved": "Better", "changes": "many"}', "bad")
        assert outcome.value["changes"] == []


class TestGrammar:
    def test_valid_object(self):
        completion = json.dumps({
            "corrected": "The cat sat on the mat.",
            "errors": [{"original": "sitted", "correction": "sat", "type": "grammar"}],
        })
        outcome = parse_grammar(completion, "The cat sitted on the mat.")
        assert isinstance(outcome, Ok)
        assert outcome.value["errors"] == [{"original": "sitted", "correction": "sat", "type": "grammar"}]
        assert outcome.value["degraded"] is False

    def test_clean_text_is_not_degraded(self):
        outcome = parse_grammar('{"corrected": "Fine.", "errors": []}', "Fine.")
        assert outcome == Ok({"corrected": "Fine.", "errors": [], "degraded": False})

    def test_fallback_is_flagged_as_degraded(self):
        outcome = parse_grammar("No errors found!", "Fine.")
        assert isinstance(outcome, Degraded)
        assert outcome.value == {"corrected": "Fine.", "errors": [], "degraded": True}

    def test_malformed_error_entries_are_skipped(self):
        completion = json.dumps({
            "corrected": "x",
            "errors": ["oops", {"original": "a"}, {"original": "teh", "correction": "the"}],
        })
        errors = parse_grammar(completion, "x").value["errors"]
        assert errors == [{"original": "teh", "correction": "the", "type": "grammar"}]

    @pytest.mark.parametrize("errors", ["5", "true", "\"typo\"", "{\"original\": \"a\"}"])
    def test_non_list_errors_become_empty(self, errors):
        outcome = parse_grammar(f'{{"corrected": "Fixed.", "errors": {errors}}}', "orig")
        assert outcome == Ok({"corrected": "Fixed.", "errors": [], "degraded": False})


class TestCategory:
    def test_case_insensitive_trimmed_match(self):
        assert parse_category("  web development  ") == Ok("Web Development")

    def test_unknown_category_is_other(self):
        outcome = parse_category("quantum knitting")
        assert isinstance(outcome, Degraded)
        assert outcome.value == "Other"

    def test_other_is_a_real_answer(self):
        assert parse_category("Other") == Ok("Other")


class TestResultTypes:
    def test_text_is_verbatim(self):
        completion = "  A summary with trailing space. "
        assert parse_text(completion) == Ok(completion)

    def test_unwrap_returns_values(self):
        assert unwrap(Ok(1)) == 1
        assert unwrap(Degraded([], "reason")) == []

    def test_unwrap_raises_carried_error(self):
        with pytest.raises(ServiceUnavailableError):
            unwrap(Err(ServiceUnavailableError()))

    @pytest.mark.parametrize("completion", ["", None, "{", "[", "}{", "][", "{\"a\": [}", "null",
                                            '{"corrected": "x", "errors": 5}',
                                            '{"corrected": "x", "errors": true}'])
    def test_parsers_never_raise(self, completion):
        parse_tags(completion)
        parse_titles(completion)
        parse_improvement(completion, "orig")
        parse_grammar(completion, "orig")
        parse_category(completion)
