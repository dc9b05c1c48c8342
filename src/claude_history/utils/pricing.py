"""Per-model token pricing and context limits."""

from claude_history.types.records import TokenUsage

# Per 1M tokens
MODEL_COSTS: dict[str, dict[str, float]] = {
    "claude-opus-4-6":   {"input": 15.00, "output": 75.00, "cache_read": 1.50, "cache_create": 18.75},
    "claude-opus-4-5":   {"input": 5.00,  "output": 25.00, "cache_read": 0.50, "cache_create": 6.25},
    "claude-sonnet-4-5": {"input": 3.00,  "output": 15.00, "cache_read": 0.30, "cache_create": 3.75},
    "claude-haiku-4-5":  {"input": 0.80,  "output": 4.00,  "cache_read": 0.08, "cache_create": 1.00},
}

# Unknown or missing models are billed at Sonnet rates.
DEFAULT_COSTS: dict[str, float] = MODEL_COSTS["claude-sonnet-4-5"]

MODEL_CONTEXT_LIMITS: dict[str, int] = {
    "claude-sonnet-4-5": 200_000,
    "claude-opus-4-5-20251101": 200_000,
    "claude-haiku-4-5": 200_000,
}

DEFAULT_CONTEXT_LIMIT = 200_000


def match_model(model: str) -> dict[str, float] | None:
    """Match a model string to its cost entry by prefix."""
    if not model:
        return None
    for prefix, costs in MODEL_COSTS.items():
        if model.startswith(prefix):
            return costs
    # Same family, different minor version (e.g., "claude-sonnet-4-1")
    for prefix, costs in MODEL_COSTS.items():
        base = prefix.rsplit("-", 1)[0]
        if model.startswith(base):
            return costs
    return None


def costs_for(model: str) -> dict[str, float]:
    return match_model(model) or DEFAULT_COSTS


def calculate_cost(usage: TokenUsage, model: str) -> float:
    """Calculate cost in USD for the given usage and model."""
    costs = costs_for(model)
    return (
        usage.input_tokens * costs["input"]
        + usage.output_tokens * costs["output"]
        + usage.cache_read_input_tokens * costs["cache_read"]
        + usage.cache_creation_input_tokens * costs["cache_create"]
    ) / 1_000_000


def context_limit(model: str) -> int:
    return MODEL_CONTEXT_LIMITS.get(model, DEFAULT_CONTEXT_LIMIT)
