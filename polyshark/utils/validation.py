"""Input validation for raw market and order book snapshots.

The simulation core assumes well-formed values (sorted levels, non-negative
sizes, prices in [0, 1]). These helpers are what the snapshot parser uses to
enforce that before anything reaches the core.
"""

from typing import Any, List, Sequence


class ValidationError(ValueError):
    """Raised when a snapshot field fails validation."""
    pass


def _to_float(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be numeric, got bool")
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise ValidationError(f"{label} must be numeric, got '{value}'") from None
    if not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be numeric, got {type(value).__name__}")
    return float(value)


def validate_price(price: Any, label: str = "price") -> float:
    """Validate and normalize a price value.

    Numeric strings are accepted since exchange payloads quote prices as text.

    Raises:
        ValidationError: If price is not numeric or outside [0, 1]
    """
    price = _to_float(price, label)

    if not 0 <= price <= 1:
        raise ValidationError(f"{label} must be between 0 and 1, got {price}")

    return price


def validate_size(size: Any, label: str = "size") -> float:
    """Validate and normalize a size/quantity value.

    Raises:
        ValidationError: If size is not numeric or negative
    """
    size = _to_float(size, label)

    if size < 0:
        raise ValidationError(f"{label} must be non-negative, got {size}")

    return size


def validate_fee_bps(bps: Any, label: str = "fee_bps") -> int:
    """Validate a fee rate expressed in basis points (0-10000)."""
    value = _to_float(bps, label)
    if not 0 <= value <= 10000:
        raise ValidationError(f"{label} must be between 0 and 10000 bps, got {value}")
    return int(value)


def validate_identifier(identifier: Any, label: str = "id") -> str:
    """Validate a market or token identifier.

    Raises:
        ValidationError: If the identifier is empty after stripping
    """
    if identifier is None:
        raise ValidationError(f"{label} is required")
    identifier = str(identifier).strip()

    if not identifier:
        raise ValidationError(f"{label} cannot be empty")

    return identifier


def validate_binary_outcomes(outcomes: Sequence[Any], prices: Sequence[Any]) -> List[float]:
    """Validate parallel outcome/price arrays and return the parsed prices.

    Raises:
        ValidationError: If the arrays differ in length or hold fewer than two outcomes
    """
    if len(outcomes) != len(prices):
        raise ValidationError(
            f"outcomes and outcome_prices must have equal length, got {len(outcomes)} and {len(prices)}"
        )
    if len(outcomes) < 2:
        raise ValidationError(f"binary market needs at least 2 outcomes, got {len(outcomes)}")
    return [validate_price(p, f"outcome_prices[{i}]") for i, p in enumerate(prices)]
