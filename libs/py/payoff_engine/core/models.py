# SPDX-License-Identifier: MIT

"""Core Pydantic models for the payoff engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class PositionType(str, Enum):
    """Supported exposure variants."""

    SPOT = "spot"
    OPTION = "option"
    FUTURES = "futures"


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"


class RiskLevel(str, Enum):
    """Coarse structural risk buckets."""

    LOW = "LOW"  # limited profit, limited loss
    MEDIUM = "MEDIUM"  # unlimited profit, limited loss
    HIGH = "HIGH"  # unlimited loss potential


def _direction(quantity: float) -> str:
    return "Long" if quantity >= 0 else "Short"


def _fmt(value: float) -> str:
    return f"{value:.10g}"


def _needs_description(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    return not str(data.get("description") or "").strip()


def _coerce_option_type(raw: Any) -> Any:
    if isinstance(raw, OptionType):
        return raw
    text = str(raw or "").strip().upper()
    if text.startswith("C"):
        return OptionType.CALL
    if text.startswith("P"):
        return OptionType.PUT
    return raw


def _floats(data: Mapping[str, Any], *keys: str) -> tuple[float, ...] | None:
    try:
        return tuple(float(data[key]) for key in keys)
    except (KeyError, TypeError, ValueError):
        # Let field validation report the offending value.
        return None


class _PositionMixin:
    """Capability surface shared by every position variant.

    The variants do not form a hierarchy: dispatch happens on the concrete
    class, this mixin only provides the helpers every variant exposes.
    """

    @property
    def position_type(self) -> PositionType:
        return PositionType(self.kind)

    def is_active(self) -> bool:
        return self.active

    def with_active(self, active: bool) -> "Position":
        """Return a copy with ``active`` replaced."""

        return self.model_copy(update={"active": bool(active)})  # type: ignore[attr-defined]

    def toggled(self) -> "Position":
        return self.with_active(not self.active)

    def payoff_at(self, underlying_price: float) -> float:
        from .payoff import calculate_single_payoff

        return calculate_single_payoff(self, underlying_price)  # type: ignore[arg-type]


class SpotPosition(_PositionMixin, BaseModel):
    """Direct ownership (or short sale) of the underlying."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    kind: Literal["spot"] = "spot"
    quantity: float
    entry_price: float
    description: str = ""
    active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _default_description(cls, data: Any) -> Any:
        if not _needs_description(data):
            return data
        values = _floats(data, "quantity", "entry_price")
        if values is None:
            return data
        quantity, entry_price = values
        return {
            **data,
            "description": f"{_direction(quantity)} {_fmt(abs(quantity))} units @ {_fmt(entry_price)}",
        }


class OptionPosition(_PositionMixin, BaseModel):
    """Call or put held to expiry; ``expiry_price`` is informational only."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    kind: Literal["option"] = "option"
    option_type: OptionType
    quantity: float
    strike_price: float
    premium: float
    expiry_price: float
    description: str = ""
    active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = {**data, "option_type": _coerce_option_type(data.get("option_type"))}
        if data.get("expiry_price") is None and "strike_price" in data:
            data["expiry_price"] = data["strike_price"]
        if not _needs_description(data):
            return data
        values = _floats(data, "quantity", "strike_price", "premium")
        option_type = data["option_type"]
        if values is None or not isinstance(option_type, OptionType):
            return data
        quantity, strike, premium = values
        label = option_type.value.capitalize()
        return {
            **data,
            "description": (
                f"{_direction(quantity)} {_fmt(abs(quantity))} {label} @ Strike {_fmt(strike)}"
                f" Premium {_fmt(premium)}"
            ),
        }

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL


class FuturesPosition(_PositionMixin, BaseModel):
    """Futures contracts; ``contract_size`` scales per-unit moves into P&L."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    kind: Literal["futures"] = "futures"
    quantity: float
    entry_price: float
    contract_size: float
    description: str = ""
    active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _default_description(cls, data: Any) -> Any:
        if not _needs_description(data):
            return data
        values = _floats(data, "quantity", "entry_price", "contract_size")
        if values is None:
            return data
        quantity, entry_price, contract_size = values
        return {
            **data,
            "description": (
                f"{_direction(quantity)} {_fmt(abs(quantity))} Futures @ {_fmt(entry_price)}"
                f" (Size: {_fmt(contract_size)})"
            ),
        }


Position = Annotated[
    Union[SpotPosition, OptionPosition, FuturesPosition],
    Field(discriminator="kind"),
]

POSITION_CLASSES = (SpotPosition, OptionPosition, FuturesPosition)

_POSITION_ADAPTER: TypeAdapter[Position] = TypeAdapter(Position)


def parse_position(data: Mapping[str, Any]) -> Position:
    """Validate a raw mapping (``kind`` selects the variant) into a position."""

    return _POSITION_ADAPTER.validate_python(dict(data))


def parse_positions(rows: Iterable[Mapping[str, Any]]) -> list[Position]:
    return [parse_position(row) for row in rows]


def active_positions(positions: Iterable[Position]) -> list[Position]:
    return [position for position in positions if position.is_active()]


@dataclass(frozen=True, slots=True)
class PayoffPoint:
    """One sample on the P&L curve."""

    price: float
    payoff: float

    def to_payload(self) -> dict[str, float]:
        return {"price": self.price, "payoff": self.payoff}


@dataclass(frozen=True)
class PortfolioMetrics:
    """Aggregate figures for a portfolio over a sampled price range.

    Optional fields are ``None`` when the portfolio has no active positions.
    ``max_profit``/``max_loss`` only cover the sampled range, and
    ``profit_probability``/``expected_value`` weight every sampled price
    equally; neither is a statement about the real price distribution.
    """

    total_positions: int
    breakeven_points: list[float] = field(default_factory=list)
    max_profit: float | None = None
    max_loss: float | None = None
    profit_probability: float | None = None
    expected_value: float | None = None

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)
