"""Tests for the usage cost estimate."""

import pytest

from peer_review.usage.cost_calculator import (
    PRICES,
    ModelPrice,
    estimate_cost,
    format_usage,
    unpriced_models,
)

HAIKU = "claude-haiku-4-5-20251001"
SONNET = "claude-sonnet-4-5-20250929"


class TestModelPrice:
    def test_cost_per_million(self):
        price = ModelPrice(input_per_mtok=2.0, output_per_mtok=8.0)
        assert price.cost(1_000_000, 500_000) == pytest.approx(6.0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PRICES[HAIKU].input_per_mtok = 0.0


class TestEstimateCost:
    def test_empty(self):
        assert estimate_cost([]) == 0

    def test_sums_across_models(self):
        """Each call is priced with its own model's rates."""
        calls = [(HAIKU, 500_000, 0), (SONNET, 0, 100_000), (HAIKU, 0, 200_000)]
        expected = 0.5 * 1.00 + 0.1 * 15.00 + 0.2 * 5.00
        assert estimate_cost(calls) == pytest.approx(expected)

    def test_unknown_model_left_out(self):
        calls = [("some-other-model", 1_000_000, 1_000_000), (HAIKU, 1_000_000, 0)]
        assert estimate_cost(calls) == pytest.approx(1.00)


class TestFormatUsage:
    def test_summary_line(self):
        summary = {"input": 120, "output": 40, "calls": [(HAIKU, 120, 40)]}
        line = format_usage(summary)
        assert line.startswith("Tokens: 120 in / 40 out over 1 call(s), est. $")
        assert "no price" not in line

    def test_names_unpriced_models_once(self):
        """Models without a price are listed so a zero estimate is not misread."""
        calls = [("local-model", 10, 10), ("local-model", 5, 5), (HAIKU, 1, 1)]
        line = format_usage({"input": 16, "output": 16, "calls": calls})
        assert line.endswith("(no price for local-model)")
        assert unpriced_models(calls) == ["local-model"]

    def test_no_calls(self):
        assert format_usage({"input": 0, "output": 0, "calls": []}) == (
            "Tokens: 0 in / 0 out over 0 call(s), est. $0.0000"
        )
