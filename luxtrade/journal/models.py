"""Journal data models — trade records and account settings."""

import uuid
from dataclasses import asdict, dataclass, field
from typing import Optional


TRADE_TYPES = ("BUY", "SELL")
TRADE_STATUSES = ("WIN", "LOSS", "BREAKEVEN")


@dataclass(frozen=True)
class Trade:
    """A journaled trade."""

    id: str
    date: str  # ISO date, YYYY-MM-DD
    pair: str
    type: str  # BUY or SELL
    entry_price: float
    exit_price: float
    lot_size: float
    pnl: float  # dollars
    status: str  # WIN, LOSS or BREAKEVEN
    notes: Optional[str] = None
    setup: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AccountSettings:
    balance: float = 10_000.0
    currency: str = "USD"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisResult:
    """Coaching feedback on a trade journal."""

    summary: str
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    recommendation: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _number(form: dict, name: str) -> float:
    try:
        return float(form.get(name) or 0)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {form.get(name)!r}") from None


def build_trade(form: dict, trade_id: Optional[str] = None) -> Trade:
    """Build a ``Trade`` from a journal submission.

    ``pnl`` and ``date`` are required; ``pair`` defaults to EURUSD,
    ``type`` to BUY and ``status`` to WIN.  Prices and lot size default
    to zero.

    Raises:
        ValueError: If a required field is missing, a numeric field is
            not a number, or ``type`` / ``status`` is not a known value.
    """
    for name in ("pnl", "date"):
        if _blank(form.get(name)):
            raise ValueError(f"{name} is required")

    trade_type = str(form.get("type") or "BUY").upper()
    if trade_type not in TRADE_TYPES:
        raise ValueError(f"type must be one of {TRADE_TYPES}, got {trade_type!r}")
    status = str(form.get("status") or "WIN").upper()
    if status not in TRADE_STATUSES:
        raise ValueError(f"status must be one of {TRADE_STATUSES}, got {status!r}")

    return Trade(
        id=trade_id or uuid.uuid4().hex,
        date=str(form["date"]),
        pair=str(form.get("pair") or "EURUSD"),
        type=trade_type,
        entry_price=_number(form, "entry_price"),
        exit_price=_number(form, "exit_price"),
        lot_size=_number(form, "lot_size"),
        pnl=_number(form, "pnl"),
        status=status,
        notes=form.get("notes") or None,
        setup=form.get("setup") or None,
    )
