"""Tests for model pricing lookups."""

import pytest
from claude_history.types.records import TokenUsage
from claude_history.utils.pricing import (
    DEFAULT_CONTEXT_LIMIT,
    DEFAULT_COSTS,
    MODEL_COSTS,
    calculate_cost,
    context_limit,
    match_model,
)


class TestMatchModel:
    def test_exact_prefix(self):
        assert match_model("claude-haiku-4-5") is MODEL_COSTS["claude-haiku-4-5"]

    def test_dated_model(self):
        assert match_model("claude-sonnet-4-5-20250929") is MODEL_COSTS["claude-sonnet-4-5"]

    def test_family_fallback(self):
        assert match_model("claude-haiku-4-1") is MODEL_COSTS["claude-haiku-4-5"]

    def test_unknown(self):
        assert match_model("gpt-4o") is None
        assert match_model("") is None


class TestCalculateCost:
    def test_input_and_output(self):
        usage = TokenUsage(input_tokens=1_000_000, output_tokens=1_000_000)
        assert calculate_cost(usage, "claude-sonnet-4-5") == pytest.approx(18.0)

    def test_cache_tokens(self):
        usage = TokenUsage(cache_read_input_tokens=1_000_000, cache_creation_input_tokens=1_000_000)
        assert calculate_cost(usage, "claude-haiku-4-5") == pytest.approx(1.08)

    def test_unknown_model_uses_default(self):
        usage = TokenUsage(input_tokens=300, output_tokens=60)
        expected = (300 * DEFAULT_COSTS["input"] + 60 * DEFAULT_COSTS["output"]) / 1_000_000
        assert calculate_cost(usage, "mystery-model") == pytest.approx(expected)
        assert calculate_cost(usage, "mystery-model") > 0

    def test_zero_usage(self):
        assert calculate_cost(TokenUsage(), "claude-opus-4-6") == 0.0


class TestContextLimit:
    def test_known(self):
        assert context_limit("claude-sonnet-4-5") == 200_000

    def test_unknown_falls_back(self):
        assert context_limit("something-else") == DEFAULT_CONTEXT_LIMIT
