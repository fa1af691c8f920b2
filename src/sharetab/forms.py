"""Form models validating raw collaborator input before it reaches the store."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .models.card import CardType
from .models.types import as_utc, now

GROUP_ICONS = ["🏖️", "🛒", "🎉", "🍕", "✈️", "🏠", "🎮", "💼", "🎁", "🚗"]
GROUP_COLORS = [
    "#10b981", "#3b82f6", "#8b5cf6", "#f59e0b", "#ef4444",
    "#ec4899", "#14b8a6", "#6366f1", "#f97316", "#06b6d4",
]
CARD_COLORS = GROUP_COLORS + ["#84cc16", "#a855f7"]

FormT = TypeVar("FormT", bound=BaseModel)


def _require_text(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"Please provide a {label}.")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PersonForm(BaseModel):
    """Form model for creating or renaming a person."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _require_text(value, "name")


class CardForm(BaseModel):
    """Form model for creating or editing a card."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", max_length=128)
    type: CardType = Field(default=CardType.CREDIT)
    color: str = Field(default=CARD_COLORS[0], max_length=7)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _require_text(value, "card name")


class GroupForm(BaseModel):
    """Form model for creating or editing a group."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(default="", max_length=128)
    description: Optional[str] = Field(default=None, max_length=400)
    color: str = Field(default=GROUP_COLORS[0], max_length=7)
    icon: str = Field(default=GROUP_ICONS[0], max_length=16)
    person_ids: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _require_text(value, "group name")

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("person_ids")
    @classmethod
    def unique_members(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(v for v in value if v))


class ParticipantInput(BaseModel):
    """One row of the split editor: include/exclude plus an optional fixed amount."""

    person_id: str
    is_included: bool = True
    fixed_amount: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("fixed_amount", mode="before")
    @classmethod
    def blank_fixed_amount(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("fixed_amount")
    @classmethod
    def zero_means_absent(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value == 0:
            return None
        return value


def _coerce_datetime(value: Any) -> Any:
    """Date-only input means midnight UTC; naive datetimes are taken as UTC."""
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time(), tzinfo=timezone.utc)
    if isinstance(value, str) and len(value.strip()) == 10:
        return as_utc(datetime.fromisoformat(value.strip()))
    return value


def _split_tags(value: str | Iterable[str] | None) -> list[str] | Iterable[str]:
    """Convert comma-separated tag strings into a list."""

    if value is None:
        return []
    if isinstance(value, str):
        return [tag for tag in (part.strip() for part in value.split(",")) if tag]
    return [tag.strip() for tag in value if tag and tag.strip()]


class TransactionForm(BaseModel):
    """Form model for creating or fully editing a transaction."""

    model_config = ConfigDict(str_strip_whitespace=True)

    group_id: str
    card_id: Optional[str] = None
    description: str = Field(default="", max_length=255)
    total_amount: Decimal = Field(gt=0)
    date: datetime = Field(default_factory=now)
    paid_by_person_id: str = ""
    participants: list[ParticipantInput] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _require_text(value, "description")

    @field_validator("paid_by_person_id")
    @classmethod
    def validate_payer(cls, value: str) -> str:
        return _require_text(value, "payer")

    @field_validator("card_id", mode="before")
    @classmethod
    def blank_card(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("date")
    @classmethod
    def date_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return _split_tags(value)

    @model_validator(mode="after")
    def unique_participants(self) -> "TransactionForm":
        seen: set[str] = set()
        for participant in self.participants:
            if participant.person_id in seen:
                raise ValueError(f"Person {participant.person_id} appears twice in the split.")
            seen.add(participant.person_id)
        return self


class TransactionEditForm(BaseModel):
    """Quick edit from the monthly view: description, amount and tags only."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(default="", max_length=255)
    total_amount: Decimal = Field(gt=0)
    tags: list[str] = Field(default_factory=list)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _require_text(value, "description")

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value: Any) -> Any:
        return _split_tags(value)


class PaymentForm(BaseModel):
    """Form model for recording a payment against a transaction."""

    model_config = ConfigDict(str_strip_whitespace=True)

    transaction_id: str
    person_id: str = ""
    amount: Decimal = Field(gt=0)
    paid_at: datetime = Field(default_factory=now)

    @field_validator("person_id")
    @classmethod
    def validate_person(cls, value: str) -> str:
        return _require_text(value, "person")

    @field_validator("paid_at", mode="before")
    @classmethod
    def parse_paid_at(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("paid_at")
    @classmethod
    def paid_at_in_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


def structured_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into ``{field: [messages]}``."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


def validate_form(form_cls: type[FormT], data: FormT | dict[str, Any]) -> FormT:
    """Validate ``data`` against ``form_cls`` or raise ``ValidationError``."""

    if isinstance(data, form_cls):
        return data
    try:
        return form_cls.model_validate(data)
    except PydanticValidationError as exc:
        errors = structured_errors(exc)
        fields = ", ".join(sorted(errors))
        raise ValidationError(f"Invalid {form_cls.__name__}: {fields}", errors) from exc


__all__ = [
    "CARD_COLORS",
    "CardForm",
    "GROUP_COLORS",
    "GROUP_ICONS",
    "GroupForm",
    "ParticipantInput",
    "PaymentForm",
    "PersonForm",
    "TransactionEditForm",
    "TransactionForm",
    "structured_errors",
    "validate_form",
]
