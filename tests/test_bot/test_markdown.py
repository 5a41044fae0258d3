"""Tests for MarkdownV2 escaping and number abbreviation."""

from decimal import Decimal

import pytest

from src.bot.markdown import LINK_BREAKER, abbreviate, break_links, escape, escape_url, link


class TestEscape:
    def test_legacy(self) -> None:
        assert escape("a.b-c!", "legacy") == "a\\.b\\-c\\!"
        assert escape("x_(y)*", "legacy") == "x_(y)*"

    def test_strict(self) -> None:
        assert escape("x_(y)*", "strict") == "x\\_\\(y\\)\\*"
        assert escape("#1 {ok} = ~>`+", "strict") == "\\#1 \\{ok\\} \\= \\~\\>\\`\\+"

    @pytest.mark.parametrize("dialect", ["legacy", "strict"])
    def test_brackets_pipe_and_backslash(self, dialect: str) -> None:
        assert escape("PEPE[2]|\\", dialect) == "PEPE\\[2\\]\\|\\\\"

    def test_backslash_escaped_once(self) -> None:
        assert escape("a\\.b", "strict") == "a\\\\\\.b"

    def test_telegram_covers_brackets(self) -> None:
        assert escape("[a]|b.", "telegram") == "\\[a\\]\\|b\\."

    def test_plain_text_untouched(self) -> None:
        assert escape("Honeypot 0% ✅", "strict") == "Honeypot 0% ✅"

    def test_unknown_dialect(self) -> None:
        with pytest.raises(ValueError):
            escape("x", "html")


class TestLinks:
    def test_break_links(self) -> None:
        assert break_links("A.B") == "A." + LINK_BREAKER + "B"
        assert LINK_BREAKER == "\u200c"

    def test_escape_url(self) -> None:
        assert escape_url("https://x.io/a_(b)") == "https://x.io/a_(b\\)"

    def test_link_escapes_text_only(self) -> None:
        assert link("95% locked.", "https://lock.io/1", "strict") == "[95% locked\\.](https://lock.io/1)"


class TestAbbreviate:
    @pytest.mark.parametrize(
        ("number", "digits", "expected"),
        [
            (1234567, 3, "1.23M"),
            (Decimal("250000"), 4, "250K"),
            (999, 5, "999"),
            (999999, 3, "1M"),
            (Decimal("0.0001234"), 5, "0.0001234"),
            (Decimal("0.00001234"), 2, "0.000012"),
            (1_500_000_000, 2, "1.5B"),
            (-1500, 2, "-1.5K"),
            (0, 5, "0"),
        ],
    )
    def test_values(self, number, digits: int, expected: str) -> None:
        assert abbreviate(number, digits) == expected

    def test_rejects_nan(self) -> None:
        with pytest.raises(ValueError):
            abbreviate(float("nan"))
