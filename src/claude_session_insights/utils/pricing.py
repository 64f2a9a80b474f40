"""Model pricing and token cost calculation."""

from dataclasses import dataclass
from typing import Mapping

from claude_session_insights.types.sessions import SessionMeta

TOKENS_PER_UNIT = 1_000_000


@dataclass(frozen=True)
class ModelPricing:
    """USD per million tokens."""
    input: float
    output: float
    cache_write: float
    cache_read: float


_OPUS = ModelPricing(input=15.00, output=75.00, cache_write=18.75, cache_read=1.50)
_SONNET = ModelPricing(input=3.00, output=15.00, cache_write=3.75, cache_read=0.30)
_HAIKU = ModelPricing(input=0.80, output=4.00, cache_write=1.00, cache_read=0.08)

MODEL_PRICING: dict[str, ModelPricing] = {
    # Opus
    "claude-opus-4-5-20250514": _OPUS,
    "claude-opus-4-6": _OPUS,
    # Sonnet
    "claude-sonnet-4-5-20250929": _SONNET,
    "claude-sonnet-4-5-20250514": _SONNET,
    "claude-sonnet-4-0-20250514": _SONNET,
    "claude-sonnet-4-5": _SONNET,
    # Haiku
    "claude-haiku-4-5-20251001": _HAIKU,
    "claude-haiku-3-5-20241022": _HAIKU,
    "claude-haiku-4-5": _HAIKU,
    # Legacy
    "claude-3-5-sonnet-20241022": _SONNET,
    "claude-3-5-sonnet-20240620": _SONNET,
    "claude-3-5-haiku-20241022": _HAIKU,
    "claude-3-opus-20240229": _OPUS,
}

# Unknown or missing models are priced at Sonnet rates
FALLBACK_PRICING = _SONNET


def _as_pricing(model: str, value: ModelPricing | Mapping[str, float]) -> ModelPricing:
    if isinstance(value, ModelPricing):
        return value
    if not isinstance(value, Mapping):
        raise ValueError(f"Invalid pricing for {model}: expected an object of rates")
    # Accept both snake_case and the camelCase used in JSON config files
    try:
        return ModelPricing(
            input=float(value["input"]),
            output=float(value["output"]),
            cache_write=float(value.get("cache_write", value.get("cacheWrite", 0.0))),
            cache_read=float(value.get("cache_read", value.get("cacheRead", 0.0))),
        )
    except KeyError as e:
        raise ValueError(f"Invalid pricing for {model}: missing rate {e}") from None
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid pricing for {model}: {e}") from None


def resolve_pricing(
    overrides: Mapping[str, ModelPricing | Mapping[str, float]] | None = None,
) -> dict[str, ModelPricing]:
    """Built-in pricing with overrides merged on top (never replacing the table)."""
    table = dict(MODEL_PRICING)
    if overrides and not isinstance(overrides, Mapping):
        raise ValueError("Invalid pricing: expected an object keyed by model id")
    if overrides:
        for model, pricing in overrides.items():
            table[model] = _as_pricing(model, pricing)
    return table


def get_model_pricing(
    model: str | None,
    pricing: Mapping[str, ModelPricing] | None = None,
) -> ModelPricing:
    """Pricing for a model id, falling back to FALLBACK_PRICING."""
    if not model:
        return FALLBACK_PRICING
    table = MODEL_PRICING if pricing is None else pricing
    return table.get(model, FALLBACK_PRICING)


def calculate_cost(
    input_tokens: int,
    output_tokens: int,
    cache_creation_tokens: int,
    cache_read_tokens: int,
    rates: ModelPricing,
) -> float:
    """Cost in USD for the given token counts at the given rates."""
    return (
        input_tokens / TOKENS_PER_UNIT * rates.input
        + output_tokens / TOKENS_PER_UNIT * rates.output
        + cache_creation_tokens / TOKENS_PER_UNIT * rates.cache_write
        + cache_read_tokens / TOKENS_PER_UNIT * rates.cache_read
    )


def estimate_cost(
    session: SessionMeta,
    pricing: Mapping[str, ModelPricing] | None = None,
) -> float:
    """Estimate the USD cost of a session from its token totals and model."""
    return calculate_cost(
        session.total_input_tokens,
        session.total_output_tokens,
        session.cache_creation_input_tokens,
        session.cache_read_input_tokens,
        get_model_pricing(session.model, pricing),
    )
