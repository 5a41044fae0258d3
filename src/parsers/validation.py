"""Validation verdicts derived from the evaluated checklists.

"Partially validated" has differed between integrations, so it is a named
predicate picked from a registry (``settings.validation_predicate``).
"""

from collections.abc import Callable, Sequence

from src.parsers.dapp.models import MarketData
from src.parsers.security_rules import EvaluatedProperty, find_property

PartialPredicate = Callable[[Sequence[EvaluatedProperty], Sequence[EvaluatedProperty]], bool]


def _positive(properties: Sequence[EvaluatedProperty], name: str) -> bool:
    prop = find_property(properties, name)
    return prop is not None and prop.is_positive


def core_partial_validation(
    contract: Sequence[EvaluatedProperty], trading: Sequence[EvaluatedProperty]
) -> bool:
    """Not mintable and not a honeypot."""
    return _positive(contract, "Mintable") and _positive(trading, "Honeypot")


def strict_partial_validation(
    contract: Sequence[EvaluatedProperty], trading: Sequence[EvaluatedProperty]
) -> bool:
    """Core checks plus no proxy, no blacklist and a fixed tax."""
    return (
        core_partial_validation(contract, trading)
        and _positive(contract, "Proxy")
        and _positive(trading, "Blacklist")
        and _positive(trading, "Modifiable Tax")
    )


PARTIAL_VALIDATION_PREDICATES: dict[str, PartialPredicate] = {
    "core": core_partial_validation,
    "strict": strict_partial_validation,
}


def get_partial_predicate(name: str) -> PartialPredicate:
    try:
        return PARTIAL_VALIDATION_PREDICATES[name]
    except KeyError:
        known = ", ".join(sorted(PARTIAL_VALIDATION_PREDICATES))
        raise ValueError(f"Unknown validation predicate {name!r} (known: {known})") from None


def is_fully_validated(
    *,
    partially_validated: bool,
    is_locked: bool,
    is_burnt: bool,
    market: MarketData | None,
) -> bool:
    """Partial validation + locked/burnt liquidity + known circulating supply and price."""
    if not partially_validated or not (is_locked or is_burnt) or market is None:
        return False
    return bool(market.circSupply) and bool(market.price_usd)
