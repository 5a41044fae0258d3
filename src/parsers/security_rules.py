"""Declarative GoPlus checklist: fixed rule tables plus one pure evaluator.

Each rule names a raw field, how to parse it, when the parsed value counts
as positive, and the label shown in the report. Rule order is display order
and lookups downstream go by display name, so both tables are versioned
data: append, don't reorder.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from loguru import logger

from src.parsers.coerce import to_decimal, to_flag
from src.parsers.exceptions import MalformedField

RULES_VERSION = 1

POSITIVE_MARK = "✅"
NEGATIVE_MARK = "❌"
UNKNOWN = "Unknown"

RENOUNCED_PLACEHOLDER = "{{renounced}}"


class ValueKind(Enum):
    FLAG = "flag"  # "0"/"1" by integer truthiness
    DECIMAL = "decimal"  # 0.0-1.0 ratio shown as percent
    TEXT = "text"  # raw passthrough
    PLACEHOLDER = "placeholder"  # filled in by the renderer


class Positivity(Enum):
    WHEN_TRUE = "when_true"
    WHEN_FALSE = "when_false"
    WHEN_ZERO = "when_zero"
    WHEN_PRESENT = "when_present"
    ALWAYS = "always"


@dataclass(frozen=True)
class SecurityRule:
    source_field: str | None
    kind: ValueKind
    positivity: Positivity
    display_name: str


@dataclass(frozen=True)
class EvaluatedProperty:
    name: str
    value: Any
    is_positive: bool
    display_value: str

    @property
    def mark(self) -> str:
        return POSITIVE_MARK if self.is_positive else NEGATIVE_MARK

    @property
    def formatted_line(self) -> str:
        """Unescaped markdown line, e.g. ``*Mintable:* No ✅``."""
        return f"*{self.name}:* {self.display_value} {self.mark}"


def _flag(field: str, positivity: Positivity, name: str) -> SecurityRule:
    return SecurityRule(field, ValueKind.FLAG, positivity, name)


CONTRACT_SECURITY_RULES: tuple[SecurityRule, ...] = (
    _flag("is_open_source", Positivity.WHEN_TRUE, "Open Source"),
    SecurityRule(None, ValueKind.PLACEHOLDER, Positivity.ALWAYS, RENOUNCED_PLACEHOLDER),
    _flag("is_proxy", Positivity.WHEN_FALSE, "Proxy"),
    _flag("is_mintable", Positivity.WHEN_FALSE, "Mintable"),
    _flag("can_take_back_ownership", Positivity.WHEN_FALSE, "Take Back Ownership"),
    SecurityRule("owner_address", ValueKind.TEXT, Positivity.WHEN_PRESENT, "Owner Address"),
    _flag("owner_change_balance", Positivity.WHEN_FALSE, "Owner Change Balance"),
    _flag("hidden_owner", Positivity.WHEN_FALSE, "Hidden Owner"),
    _flag("selfdestruct", Positivity.WHEN_FALSE, "Self-destruct"),
    _flag("external_call", Positivity.WHEN_FALSE, "External Call"),
)

TRADING_SECURITY_RULES: tuple[SecurityRule, ...] = (
    SecurityRule("buy_tax", ValueKind.DECIMAL, Positivity.WHEN_ZERO, "Buy Tax"),
    SecurityRule("sell_tax", ValueKind.DECIMAL, Positivity.WHEN_ZERO, "Sell Tax"),
    _flag("cannot_buy", Positivity.WHEN_FALSE, "Cannot be Bought"),
    _flag("cannot_sell_all", Positivity.WHEN_FALSE, "Cannot Sell All"),
    _flag("slippage_modifiable", Positivity.WHEN_FALSE, "Modifiable Tax"),
    _flag("is_honeypot", Positivity.WHEN_FALSE, "Honeypot"),
    _flag("transfer_pausable", Positivity.WHEN_FALSE, "Pausable Transfer"),
    _flag("is_blacklisted", Positivity.WHEN_FALSE, "Blacklist"),
    _flag("is_whitelisted", Positivity.WHEN_FALSE, "Whitelist"),
    _flag("is_in_dex", Positivity.WHEN_TRUE, "In main Dex"),
    _flag("is_anti_whale", Positivity.WHEN_FALSE, "Anti Whale"),
    _flag("anti_whale_modifiable", Positivity.WHEN_FALSE, "Modifiable anti whale"),
    _flag("trading_cooldown", Positivity.WHEN_FALSE, "Trading Cooldown"),
    _flag("personal_slippage_modifiable", Positivity.WHEN_FALSE, "Personal Slippage Modifiable"),
)


def parse_value(rule: SecurityRule, raw: object) -> Any:
    """Parse one raw field. Never raises; unparseable input gives None."""
    if rule.kind is ValueKind.PLACEHOLDER:
        return True
    if rule.kind is ValueKind.TEXT:
        if raw is None:
            return None
        return raw.strip() if isinstance(raw, str) else str(raw)

    value = to_flag(raw) if rule.kind is ValueKind.FLAG else to_decimal(raw)
    if value is None and raw not in (None, ""):
        # Present but junk: recovered here, never propagated
        logger.debug(str(MalformedField(rule.source_field or rule.display_name, raw)))
    return value


def is_positive(rule: SecurityRule, value: Any) -> bool:
    """Unknown values are never positive, except for ALWAYS rules."""
    if rule.positivity is Positivity.ALWAYS:
        return True
    if rule.positivity is Positivity.WHEN_TRUE:
        return value is True
    if rule.positivity is Positivity.WHEN_FALSE:
        return value is False
    if rule.positivity is Positivity.WHEN_ZERO:
        return value is not None and value == 0
    return bool(value)


def format_value(rule: SecurityRule, value: Any) -> str:
    if rule.kind is ValueKind.PLACEHOLDER:
        return ""
    if value is None or value == "":
        return UNKNOWN
    if rule.kind is ValueKind.FLAG:
        return "Yes" if value else "No"
    if rule.kind is ValueKind.DECIMAL:
        return format_percent(value)
    return str(value)


def format_percent(ratio: Decimal) -> str:
    """0.05 -> '5%', 0.125 -> '12.5%', 0 -> '0%'."""
    pct = (ratio * 100).normalize()
    return f"{pct:f}%"


def evaluate_rule(rule: SecurityRule, raw_record: Mapping[str, Any]) -> EvaluatedProperty:
    raw = raw_record.get(rule.source_field) if rule.source_field else None
    value = parse_value(rule, raw)
    return EvaluatedProperty(
        name=rule.display_name,
        value=value,
        is_positive=is_positive(rule, value),
        display_value=format_value(rule, value),
    )


def evaluate_rules(
    rules: tuple[SecurityRule, ...], raw_record: Mapping[str, Any] | None
) -> tuple[EvaluatedProperty, ...]:
    """Evaluate a rule table against one provider record, keeping rule order."""
    record = raw_record or {}
    return tuple(evaluate_rule(rule, record) for rule in rules)


def find_property(
    properties: tuple[EvaluatedProperty, ...] | list[EvaluatedProperty], name: str
) -> EvaluatedProperty | None:
    for prop in properties:
        if prop.name == name:
            return prop
    return None
