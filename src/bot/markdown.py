"""Telegram MarkdownV2 helpers: escaping dialects, links and number abbreviation."""

import re
from decimal import ROUND_HALF_UP, Decimal

from aiogram.utils.text_decorations import markdown_decoration

# One regex pass escapes each character once, so a backslash in the input
# becomes "\\" and never doubles an escape added for another character.
LEGACY_RESERVED = "\\[]|~>`#+-={}.!"
STRICT_RESERVED = LEGACY_RESERVED + "()*_"

_PATTERNS = {
    "legacy": re.compile(f"([{re.escape(LEGACY_RESERVED)}])"),
    "strict": re.compile(f"([{re.escape(STRICT_RESERVED)}])"),
}

DIALECTS = ("legacy", "strict", "telegram")

# Zero-width non-joiner after each '.' keeps link previews from reading "A.B" as a domain
LINK_BREAKER = "\u200c"

UNITS = ["", "K", "M", "B", "T"]


def escape(text: str, dialect: str = "strict") -> str:
    """Backslash-escape every character the dialect reserves.

    legacy:   \\ [ ] | ~ > ` # + - = { } . !
    strict:   legacy plus ( ) * _
    telegram: the full MarkdownV2 set, via aiogram
    """
    if dialect == "telegram":
        return markdown_decoration.quote(text)
    pattern = _PATTERNS.get(dialect)
    if pattern is None:
        raise ValueError(f"Unknown markdown dialect {dialect!r} (known: {', '.join(DIALECTS)})")
    return pattern.sub(r"\\\1", text)


def break_links(text: str) -> str:
    return text.replace(".", "." + LINK_BREAKER)


def escape_url(url: str) -> str:
    """Inside ``(...)`` of an inline link only ')' and '\\' need escaping."""
    return url.replace("\\", "\\\\").replace(")", "\\)")


def link(text: str, url: str, dialect: str = "strict") -> str:
    return f"[{escape(text, dialect)}]({escape_url(url)})"


def abbreviate(number: Decimal | float | int, digits: int = 3) -> str:
    """Compact a number to ``digits`` significant digits with a K/M/B/T suffix.

    1234567 (digits=3) -> '1.23M', 0.00001234 (digits=2) -> '0.000012', 0 -> '0'.
    """
    value = Decimal(str(number))
    if not value.is_finite():
        raise ValueError(f"Cannot abbreviate {number!r}")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    unit = 0
    while value >= 1000 and unit < len(UNITS) - 1:
        value /= 1000
        unit += 1

    rounded = _round_significant(value, digits)
    # 999.999K rounds up to 1000K: move to the next unit
    if rounded >= 1000 and unit < len(UNITS) - 1:
        unit += 1
        rounded = _round_significant(rounded / 1000, digits)

    text = f"{rounded.normalize():f}"
    return f"{sign}{text}{UNITS[unit]}"


def _round_significant(value: Decimal, digits: int) -> Decimal:
    exp = value.adjusted() - max(digits, 1) + 1
    return value.quantize(Decimal(1).scaleb(exp), rounding=ROUND_HALF_UP)
