"""
Tests for the plan parser.
"""

import pytest

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import MalformedPlanError
from toolpilot.llm.parser import candidate_text, looks_truncated, parse_plan


VALID = (
    '[{"tool": "content_items.list", "parameters": {"page": 1, "pageSize": 5}, "reasoning": "list"},'
    ' {"tool": "content_items.get", "parameters": {"id": "42"}, "reasoning": "get"}]'
)


class TestCandidateText:
    """Tests for candidate extraction."""

    def test_plain_text_is_trimmed(self):
        assert candidate_text("  [1, 2]\n") == "[1, 2]"

    def test_fenced_block_content(self):
        assert candidate_text("Here you go:\n```json\n[1]\n```\nDone") == "[1]"

    def test_fence_without_language(self):
        assert candidate_text("```\n[2]\n```") == "[2]"


class TestLooksTruncated:
    def test_closed_array(self):
        assert not looks_truncated("[1, 2]")

    def test_open_array(self):
        assert looks_truncated('[{"tool": "a"}')

    def test_no_array(self):
        assert not looks_truncated('{"tool": "a"}')


class TestParsePlan:
    """Tests for parse_plan."""

    def test_valid_json(self):
        plan = parse_plan(VALID)
        assert [a.tool for a in plan] == ["content_items.list", "content_items.get"]
        assert plan[0].parameters == {"page": 1, "pageSize": 5}
        assert plan[1].reasoning == "get"

    def test_fenced_json_matches_plain(self):
        fenced = f"Sure, here is the plan:\n```json\n{VALID}\n```"
        assert parse_plan(fenced) == parse_plan(VALID)

    def test_truncated_mid_object(self):
        """Only complete objects survive, in order."""
        text = (
            '[{"tool": "a", "parameters": {"x": 1}, "reasoning": "first"},'
            ' {"tool": "b", "parameters": {}, "reasoning": "second"},'
            ' {"tool": "c", "parameters": {"y": '
        )
        audit = AuditLog()
        plan = parse_plan(text, audit)

        assert [a.tool for a in plan] == ["a", "b"]
        assert plan[0].parameters == {"x": 1}
        assert "Response appears truncated, attempting recovery..." in audit.entries
        assert "Reconstructed truncated plan from 2 complete objects" in audit.entries

    def test_truncated_mid_property(self):
        text = '[{"tool": "a", "parameters": {}, "reasoning": "r"}, {"tool": "b", "reaso'
        plan = parse_plan(text)
        assert [a.tool for a in plan] == ["a"]

    def test_truncated_inside_fence(self):
        text = '```json\n[{"tool": "a", "parameters": {}}, {"tool": "b", "param'
        plan = parse_plan(text)
        assert [a.tool for a in plan] == ["a"]

    def test_trailing_comma_repair(self):
        text = '[{"tool": "a", "parameters": {"page": 1}, "reasoning": "r"},\n'
        audit = AuditLog()
        plan = parse_plan(text, audit)

        assert [a.tool for a in plan] == ["a"]
        assert "Completed unterminated plan array with 1 steps" in audit.entries

    def test_single_object_becomes_one_step(self):
        plan = parse_plan('{"tool": "a", "parameters": {"q": "x"}}')
        assert len(plan) == 1
        assert plan[0].tool == "a"
        assert plan[0].reasoning == ""

    def test_null_parameters(self):
        plan = parse_plan('[{"tool": "a", "parameters": null, "reasoning": null}]')
        assert plan[0].parameters == {}
        assert plan[0].reasoning == ""

    def test_empty_array(self):
        assert parse_plan("[]") == []

    def test_invalid_text(self):
        with pytest.raises(MalformedPlanError) as exc_info:
            parse_plan("I cannot help with that request.")
        assert "Could not parse plan" in str(exc_info.value)

    def test_empty_text(self):
        with pytest.raises(MalformedPlanError):
            parse_plan("")

    def test_truncated_before_any_object(self):
        with pytest.raises(MalformedPlanError):
            parse_plan('[{"tool": "a", "param')

    def test_step_without_tool(self):
        with pytest.raises(MalformedPlanError) as exc_info:
            parse_plan('[{"parameters": {}}]')
        assert "Plan step 1" in str(exc_info.value)

    def test_non_object_step(self):
        with pytest.raises(MalformedPlanError):
            parse_plan('["content_items.list"]')

    def test_scalar_json(self):
        with pytest.raises(MalformedPlanError):
            parse_plan("42")
