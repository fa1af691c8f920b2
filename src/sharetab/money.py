"""Money and date helpers shared by the store, services and exports."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")

MONTH_LABELS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]
MONTH_NAMES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]

_CURRENCY_SYMBOLS = {"BRL": "R$", "USD": "US$", "EUR": "€"}
_PT_BR_SEPARATORS = str.maketrans(",.", ".,")


def to_decimal(value: Decimal | int | float | str | None, *, field: str = "amount") -> Decimal:
    """Coerce user or storage input into a finite ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather than
    its binary expansion.
    """

    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: {value!r}", {field: ["Not a number."]})
    if isinstance(value, Decimal):
        result = value
    else:
        raw = str(value).strip() if isinstance(value, str) else str(value)
        try:
            result = Decimal(raw)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid {field}: {value!r}", {field: ["Not a number."]}) from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {field}: {value!r}", {field: ["Not a finite number."]})
    return result


def quantize_cents(value: Decimal) -> Decimal:
    """Round to cents, half-up, for display and export."""

    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal | int | float, currency: str = "BRL") -> str:
    """Format an amount pt-BR style, e.g. ``R$ 1.234,56``."""

    amount = quantize_cents(to_decimal(value))
    sign = "-" if amount < 0 else ""
    # pt-BR separators: swap the "," grouping and "." decimal point
    digits = f"{abs(amount):,.2f}".translate(_PT_BR_SEPARATORS)
    symbol = _CURRENCY_SYMBOLS.get(currency, currency)
    return f"{sign}{symbol} {digits}"


def format_date(value: date | datetime) -> str:
    """Long date label, e.g. ``05 de mar. de 2024``."""

    month = MONTH_LABELS[value.month - 1].lower()
    return f"{value.day:02d} de {month}. de {value.year}"


def format_short_date(value: date | datetime) -> str:
    """Day/month label, e.g. ``05/03``."""

    return f"{value.day:02d}/{value.month:02d}"


def format_month_year(month: int, year: int) -> str:
    """Full month label for a 0-based month, e.g. ``Março 2024``."""

    return f"{MONTH_NAMES[month]} {year}"
