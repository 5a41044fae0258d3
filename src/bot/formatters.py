"""Render TokenStatistics into a Telegram MarkdownV2 report.

Every free-form value is escaped once, at the point it is embedded. Markup
(bold, italics, link brackets, the pre-escaped ``\\(`` ``\\|``) is written
literally and never passes through the escaper.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from config.settings import ProviderEndpoints, settings
from src.bot.markdown import abbreviate, break_links, escape, escape_url, link
from src.parsers.luckblock.models import AuditReport
from src.parsers.security_rules import (
    NEGATIVE_MARK,
    POSITIVE_MARK,
    RENOUNCED_PLACEHOLDER,
    UNKNOWN,
    EvaluatedProperty,
)
from src.parsers.token_stats import TokenStatistics

WAITING_GENERATION_AUDIT_MESSAGE = "Generating Audit Report..."
NO_ISSUES_MESSAGE = "No Code Issues Detected."
MAX_ISSUE_LENGTH = 200

DISCLAIMER = (
    "Disclaimer: Nothing posted in this channel is financial advice but rather "
    "technical reviews of erc20 token smart contracts. Our tools are still in BETA "
    "mode and tokens may require an additional manual review at this time."
)


@dataclass(frozen=True)
class RenderOptions:
    show_lock_status: bool = False
    show_audit_report: bool = False
    audit_report: AuditReport | None = None  # None while the audit is still running
    audit_pdf_url: str | None = None
    audit_error: str | None = None  # set when the audit job failed
    dialect: str | None = None  # defaults to settings.markdown_dialect
    providers: ProviderEndpoints | None = None
    attribution: str | None = None


def render_token_report(stats: TokenStatistics, options: RenderOptions | None = None) -> str:
    """Format the full token report. Pure: same input, same text."""
    opts = options or RenderOptions()
    dialect = opts.dialect or settings.markdown_dialect
    providers = opts.providers or settings.providers
    attribution = opts.attribution if opts.attribution is not None else settings.attribution

    sections = [_stats_block(stats, dialect, providers)]

    if opts.show_lock_status:
        if stats.is_locked or stats.is_burnt:
            sections.append(escape("🟩 Liquidity is locked/burnt.", dialect))
        else:
            sections.append(escape("🟥 Waiting for liquidity lock/burn.", dialect))

    sections.append(
        _title(stats.token_name, "Token Contract Security", dialect)
        + "\n\n"
        + _contract_security_lines(stats, dialect)
    )
    sections.append(
        _title(stats.token_name, "Token Trading Security", dialect)
        + "\n\n"
        + "\n".join(_property_line(p, dialect) for p in stats.trading_security)
    )

    if opts.show_audit_report:
        sections.append(
            _title(stats.token_name, "AI Audit", dialect)
            + "\n\n"
            + render_audit_section(
                opts.audit_report, opts.audit_pdf_url, dialect, error=opts.audit_error
            )
        )

    sections.append(_footer_links(stats.contract_address, dialect, providers))
    sections.append(f"_{escape(DISCLAIMER, dialect)}_")
    if attribution:
        sections.append(f"_{escape(attribution, dialect)}_")

    return "\n\n".join(sections)


def render_audit_section(
    report: AuditReport | None,
    pdf_url: str | None = None,
    dialect: str = "strict",
    *,
    error: str | None = None,
) -> str:
    """AI audit block body: failure message, waiting notice, issue list or all-clear."""
    if error:
        return escape(error, dialect)
    if report is None:
        return escape(WAITING_GENERATION_AUDIT_MESSAGE, dialect)
    if not report.issues:
        return escape(NO_ISSUES_MESSAGE, dialect)

    blocks = []
    for i, issue in enumerate(report.issues, start=1):
        text = issue.issueExplanation
        if len(text) > MAX_ISSUE_LENGTH:
            text = text[:MAX_ISSUE_LENGTH] + "..."
        block = f"*{escape(f'Issue #{i}', dialect)}*\n\n{escape(text, dialect)}"
        if issue.issueCodeDiffUrl:
            block += f"\n\n{link('View recommendation', issue.issueCodeDiffUrl, dialect)}"
        blocks.append(block)

    body = "\n\n".join(blocks)
    if pdf_url:
        body += f"\n\n\n📄 {link('Download PDF', pdf_url, dialect)}"
    return body


def _title(token_name: str, suffix: str, dialect: str) -> str:
    name = escape(break_links(token_name), dialect)
    return f"__*${name} {escape(suffix, dialect)}*__"


def _stats_block(stats: TokenStatistics, dialect: str, providers: ProviderEndpoints) -> str:
    market = stats.market
    explorer = providers.explorer_base_url.rstrip("/")

    def field(emoji: str, label: str, value: str) -> str:
        return f"{escape(emoji, dialect)} *{escape(label, dialect)}:* {escape(value, dialect)}"

    liquidity = _number(market.liquidity_usd if market else None, 4)

    wallet = stats.marketing_wallet.marketingAddress if stats.marketing_wallet else None
    wallet_value = f"{explorer}/address/{wallet}" if wallet else UNKNOWN

    if stats.pair_address:
        pair_value = link(stats.pair_address, f"{explorer}/address/{stats.pair_address}", dialect)
    else:
        pair_value = escape(UNKNOWN, dialect)

    lines = [
        _title(stats.token_name, "Token Stats", dialect),
        "",
        field("🛒", "Total Supply", _number(stats.token_audit.total_supply, 5)),
        field("🏦", "Circ. Supply", _number(market.circSupply if market else None, 5)),
        field("💰", "Marketcap", _usd(market.market_cap if market else None, 5)),
        field("💸", "Price", _usd(market.price_usd if market else None, 5)),
        field("📊", "Volume", _usd(market.volume_24h_usd if market else None, 5)),
        field("🔐", "Liquidity", _usd(market.liquidity_usd if market else None, 4)),
        field("👥", "Holders", _number(market.holder_count if market else None, 2)),
        field("#️⃣", "Holder score", stats.token_audit.holder_score or UNKNOWN),
        field("📢", "Marketing Wallet", wallet_value),
        f"💵 *Liquidity*: {escape(liquidity, dialect)} \\({_lock_summary(stats, dialect)}\\)",
        f"🔗 *Pair address*: {pair_value}",
    ]
    return "\n".join(lines)


def _lock_summary(stats: TokenStatistics, dialect: str) -> str:
    locked = f"{_whole_percent(stats.locked_percentage)}% locked"
    burnt = f"{_whole_percent(stats.burnt_percentage)}% burnt"
    locked_text = (
        link(locked, stats.lp_lock_link, dialect)
        if stats.is_locked and stats.lp_lock_link
        else escape(locked, dialect)
    )
    burnt_text = (
        link(burnt, stats.burn_link, dialect)
        if stats.is_burnt and stats.burn_link
        else escape(burnt, dialect)
    )
    return f"{locked_text}, {burnt_text}"


def _contract_security_lines(stats: TokenStatistics, dialect: str) -> str:
    lines = []
    for prop in stats.contract_security:
        if prop.name == RENOUNCED_PLACEHOLDER:
            verdict = f"Yes {POSITIVE_MARK}" if stats.is_renounced else f"No {NEGATIVE_MARK}"
            lines.append(f"*Renounced:* {verdict}")
        else:
            lines.append(_property_line(prop, dialect))
    return "\n".join(lines)


def _property_line(prop: EvaluatedProperty, dialect: str) -> str:
    return f"*{escape(prop.name, dialect)}:* {escape(prop.display_value, dialect)} {prop.mark}"


def _footer_links(contract_address: str, dialect: str, providers: ProviderEndpoints) -> str:
    swap = f"{providers.swap_base_url}?inputCurrency={contract_address}&outputCurrency=ETH"
    explorer = f"{providers.explorer_base_url.rstrip('/')}/token/{contract_address}"
    chart = f"{providers.chart_base_url.rstrip('/')}/{contract_address}"
    return " \\| ".join(
        [
            link("Uniswap", swap, dialect),
            link("Etherscan", explorer, dialect),
            link("Chart", chart, dialect),
        ]
    )


def _number(value: Decimal | None, digits: int) -> str:
    if value is None:
        return UNKNOWN
    return abbreviate(value, digits)


def _usd(value: Decimal | None, digits: int) -> str:
    if value is None:
        return UNKNOWN
    return f"${abbreviate(value, digits)}"


def _whole_percent(ratio: Decimal) -> int:
    return int((ratio * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
