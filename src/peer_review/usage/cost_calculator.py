"""Estimated spend for a refinement run, from the client's token log."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelPrice:
    """USD per million tokens."""

    input_per_mtok: float
    output_per_mtok: float

    def cost(self, input_tokens: int, output_tokens: int) -> float:
        return (input_tokens * self.input_per_mtok + output_tokens * self.output_per_mtok) / 1_000_000


PRICES: dict[str, ModelPrice] = {
    "claude-haiku-4-5-20251001": ModelPrice(input_per_mtok=1.00, output_per_mtok=5.00),
    "claude-sonnet-4-5-20250929": ModelPrice(input_per_mtok=3.00, output_per_mtok=15.00),
}


def unpriced_models(calls: list[tuple[str, int, int]]) -> list[str]:
    """Models in ``calls`` with no entry in ``PRICES``, in first-seen order."""
    return list(dict.fromkeys(model for model, _, _ in calls if model not in PRICES))


def estimate_cost(calls: list[tuple[str, int, int]]) -> float:
    """Sum the cost of ``(model, input_tokens, output_tokens)`` calls.

    Calls to models missing from ``PRICES`` are left out of the total.
    """
    return sum(
        PRICES[model].cost(input_tokens, output_tokens)
        for model, input_tokens, output_tokens in calls
        if model in PRICES
    )


def format_usage(summary: dict) -> str:
    """One-line usage report for ``LLMClient.get_token_summary()`` output."""
    calls = summary["calls"]
    line = (
        f"Tokens: {summary['input']} in / {summary['output']} out "
        f"over {len(calls)} call(s), est. ${estimate_cost(calls):.4f}"
    )
    missing = unpriced_models(calls)
    if missing:
        line += f" (no price for {', '.join(missing)})"
    return line
