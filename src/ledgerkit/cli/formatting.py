"""Output formatting helpers for CLI commands."""

from decimal import Decimal

from ledgerkit.domain.entities import CurrencyCode


def format_amount(amount_minor: int, currency: CurrencyCode) -> str:
    """Render a minor-unit amount with the currency's number of decimals.

    Examples:
        >>> format_amount(123456, CurrencyCode.USD)
        '1,234.56'
        >>> format_amount(1500, CurrencyCode.JPY)
        '1,500'
    """
    digits = CurrencyCode(currency).minor_digits
    value = Decimal(amount_minor).scaleb(-digits)
    return f"{value:,.{digits}f}"


def format_money(amount_minor: int, currency: CurrencyCode) -> str:
    """Render an amount followed by its currency code."""
    return f"{format_amount(amount_minor, currency)} {CurrencyCode(currency).value}"


def format_pct(progress_pct: float) -> str:
    return f"{progress_pct * 100:.0f}%"
