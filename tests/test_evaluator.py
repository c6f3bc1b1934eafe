"""RuleEvaluator -- one rule, one LLM call, never raises."""

import json

import pytest
from unittest.mock import AsyncMock

from pdf_rule_checker.errors import LLMCallError
from pdf_rule_checker.evaluation import RuleEvaluator
from pdf_rule_checker.evaluation.prompts import MAX_DOCUMENT_CHARS, build_rule_prompt
from pdf_rule_checker.llm import LLMResponse

from .conftest import PASS_VERDICT


def llm_returning(content):
    client = AsyncMock()
    client.call.return_value = LLMResponse(content=content)
    return client


class TestPrompt:
    def test_contains_rule_and_document_prefix(self):
        document = "A" * MAX_DOCUMENT_CHARS + "TAIL_MARKER"
        prompt = build_rule_prompt("Document contains a signature", document)
        assert "Document contains a signature" in prompt
        assert "A" * MAX_DOCUMENT_CHARS in prompt
        assert "TAIL_MARKER" not in prompt

    def test_demands_json_with_fixed_keys(self):
        prompt = build_rule_prompt("rule", "text")
        assert "JSON" in prompt
        for key in ("status", "evidence", "reasoning", "confidence"):
            assert f'"{key}"' in prompt

    def test_null_bytes_removed(self):
        prompt = build_rule_prompt("rule", "sig\x00ned")
        assert "\x00" not in prompt
        assert "signed" in prompt


class TestRuleEvaluator:
    @pytest.mark.asyncio
    async def test_successful_verdict(self, mock_llm):
        evaluator = RuleEvaluator(mock_llm)
        result = await evaluator.evaluate("Document contains a signature", "Signed by J. Doe")
        assert result.to_dict() == {"rule": "Document contains a signature", **PASS_VERDICT}

    @pytest.mark.asyncio
    async def test_sampling_parameters_forwarded(self, mock_llm):
        evaluator = RuleEvaluator(mock_llm, temperature=0.2, max_tokens=1000)
        await evaluator.evaluate("rule", "text")
        kwargs = mock_llm.call.call_args.kwargs
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 1000
        assert "rule" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_llm_failure_becomes_error_result(self):
        client = AsyncMock()
        client.call.side_effect = LLMCallError("LLM request failed: connection refused")
        result = await RuleEvaluator(client).evaluate("rule", "text")
        assert result.status == "error"
        assert result.rule == "rule"
        assert result.evidence == ""
        assert result.confidence == 0
        assert result.reasoning == "Processing error: LLM request failed: connection refused"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_error_result(self):
        client = AsyncMock()
        client.call.side_effect = RuntimeError("boom")
        result = await RuleEvaluator(client).evaluate("rule", "text")
        assert result.status == "error"
        assert result.reasoning == "Processing error: boom"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", None])
    async def test_empty_content_is_error(self, content):
        result = await RuleEvaluator(llm_returning(content)).evaluate("rule", "text")
        assert result.status == "error"
        assert result.reasoning == "Processing error: Empty response from API"

    @pytest.mark.asyncio
    async def test_unparseable_json_is_error_with_reasoning(self):
        result = await RuleEvaluator(llm_returning("not json at all")).evaluate("rule", "text")
        assert result.status == "error"
        assert result.reasoning
        assert "not json at all" in result.reasoning

    @pytest.mark.asyncio
    async def test_out_of_set_status_forced_to_error(self):
        content = json.dumps({"status": "partial", "confidence": 70})
        result = await RuleEvaluator(llm_returning(content)).evaluate("rule", "text")
        assert result.status == "error"
        assert result.reasoning == "Processing error: Invalid status: partial"
        assert result.confidence == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, expected", [(-20, 0), (250, 100), ("n/a", 0)])
    async def test_confidence_clamped(self, raw, expected):
        content = json.dumps({"status": "pass", "confidence": raw})
        result = await RuleEvaluator(llm_returning(content)).evaluate("rule", "text")
        assert result.status == "pass"
        assert result.confidence == expected

    @pytest.mark.asyncio
    async def test_empty_document_still_evaluated(self, mock_llm):
        result = await RuleEvaluator(mock_llm).evaluate("rule", "")
        assert result.status == "pass"
        mock_llm.call.assert_awaited_once()
