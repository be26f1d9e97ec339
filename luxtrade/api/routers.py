"""Internal API routers — /instruments, /calculate, /levels, /trades,
/settings, /stats, and /analysis endpoints.

No business logic, no DB access. Delegates to the calculator, repos,
and the analysis service.
"""

import logging
from typing import Optional

from fastapi import APIRouter

from luxtrade.calculator import sync
from luxtrade.calculator.instruments import (
    CONTRACT_SIZE_CHOICES,
    REFERENCE_USDJPY,
    get_instrument,
    list_instruments,
)
from luxtrade.calculator.models import Direction, PriceLevels, RiskInputs, RiskMode
from luxtrade.calculator.position import compute, to_number
from luxtrade.config import Config, default_config
from luxtrade.journal.models import AccountSettings, build_trade
from luxtrade.journal.stats import journal_stats
from luxtrade.services.analysis import analyze_journal

logger = logging.getLogger("luxtrade")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_trade_repo = None     # Set via configure_routers()
_settings_repo = None  # Set via configure_routers()
_config: Optional[Config] = None  # Set via configure_routers()


def configure_routers(
    trade_repo=None,
    settings_repo=None,
    config: Optional[Config] = None,
) -> None:
    """Inject dependencies from the application startup.

    Args:
        trade_repo: A ``TradeRepo`` instance (or duck-type for tests).
        settings_repo: A ``SettingsRepo`` instance (or duck-type for tests).
        config: Application config; supplies the USD/JPY reference rate
            and Gemini credentials.
    """
    global _trade_repo, _settings_repo, _config  # noqa: PLW0603
    _trade_repo = trade_repo
    _settings_repo = settings_repo
    _config = config


def _usd_jpy_rate() -> float:
    return _config.usd_jpy_rate if _config is not None else REFERENCE_USDJPY


def _current_settings() -> AccountSettings:
    if _settings_repo is None:
        return AccountSettings()
    return _settings_repo.get_settings()


def _parse_enum(enum_cls, value, default, field: str, errors: list):
    if value is None:
        return default
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        errors.append(f"{field} must be one of {[e.value for e in enum_cls]}")
        return default


def _parse_contract_size(body: dict, errors: list) -> Optional[int]:
    raw = body.get("contract_size")
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = None
    if value not in CONTRACT_SIZE_CHOICES:
        errors.append(f"contract_size must be one of {list(CONTRACT_SIZE_CHOICES)}")
        return None
    return value


# ── Calculator ───────────────────────────────────────────────────────────


@router.get("/instruments")
async def get_instruments():
    """Return the instrument catalog in display order."""
    return {
        "instruments": [
            {
                "symbol": i.symbol,
                "asset_class": i.asset_class.value,
                "contract_size": i.contract_size,
                "pip_size": i.pip_size,
                "unit_label": i.unit_label,
                "price_precision": i.price_precision,
                "special_contract_index": i.special_contract_index,
                "non_linear_pnl": i.non_linear_pnl,
            }
            for i in list_instruments()
        ]
    }


@router.post("/calculate")
async def post_calculate(body: dict):
    """Size a position and price its risk and reward.

    Numeric fields are coerced leniently; only the enum fields and the
    contract size are validated.
    """
    errors: list[str] = []
    instrument = get_instrument(str(body.get("symbol", "")))
    direction = _parse_enum(Direction, body.get("direction"), Direction.BUY, "direction", errors)
    mode = _parse_enum(RiskMode, body.get("mode"), RiskMode.LOTS, "mode", errors)
    contract_size = _parse_contract_size(body, errors)
    if errors:
        return {"status": "error", "errors": errors}

    levels = PriceLevels(
        entry_price=body.get("entry_price"),
        stop_loss_price=body.get("stop_loss_price"),
        stop_loss_distance=body.get("stop_loss_distance"),
        take_profit_price=body.get("take_profit_price"),
        take_profit_distance=body.get("take_profit_distance"),
        direction=direction,
    )
    risk_inputs = RiskInputs(
        mode=mode,
        risk_amount_usd=body.get("risk_amount"),
        risk_percent=body.get("risk_percent"),
        lot_size=body.get("lot_size"),
    )
    result = compute(
        instrument, direction, risk_inputs, levels,
        contract_size_override=contract_size,
        usd_jpy_rate=_usd_jpy_rate(),
    )
    return {
        "symbol": instrument.symbol,
        "unit_label": instrument.unit_label,
        "pricing": "non_linear" if instrument.non_linear_pnl else "linear",
        **result.to_dict(),
    }


@router.post("/levels")
async def post_levels(body: dict):
    """Derive stop-loss/take-profit prices from their distances."""
    errors: list[str] = []
    instrument = get_instrument(str(body.get("symbol", "")))
    direction = _parse_enum(Direction, body.get("direction"), Direction.BUY, "direction", errors)
    if errors:
        return {"status": "error", "errors": errors}

    levels = sync.derive_levels(
        instrument,
        direction,
        to_number(body.get("entry_price"), 0.0),
        to_number(body.get("stop_loss_distance"), 0.0),
        to_number(body.get("take_profit_distance"), 0.0),
    )
    return {
        "symbol": instrument.symbol,
        "direction": levels.direction.value,
        "entry_price": levels.entry_price,
        "stop_loss_price": levels.stop_loss_price,
        "stop_loss_distance": levels.stop_loss_distance,
        "take_profit_price": levels.take_profit_price,
        "take_profit_distance": levels.take_profit_distance,
    }


# ── Journal ──────────────────────────────────────────────────────────────


@router.get("/trades")
async def get_trades():
    """Return journaled trades, newest first."""
    if _trade_repo is None:
        return {"trades": [], "total": 0}
    trades = _trade_repo.list_trades()
    return {"trades": [t.to_dict() for t in trades], "total": len(trades)}


@router.post("/trades")
async def post_trade(body: dict):
    """Journal a trade. Requires ``pnl`` and ``date``."""
    if _trade_repo is None:
        return {"status": "error", "errors": ["Trade journal not configured"]}
    try:
        trade = build_trade(body)
        trades = _trade_repo.add_trade(trade)
    except ValueError as exc:
        return {"status": "error", "errors": [str(exc)]}
    return {
        "status": "ok",
        "trade": trade.to_dict(),
        "trades": [t.to_dict() for t in trades],
    }


@router.delete("/trades/{trade_id}")
async def delete_trade(trade_id: str):
    if _trade_repo is None:
        return {"status": "error", "errors": ["Trade journal not configured"]}
    trades = _trade_repo.delete_trade(trade_id)
    return {"status": "ok", "trades": [t.to_dict() for t in trades]}


# ── Settings ─────────────────────────────────────────────────────────────


@router.get("/settings")
async def get_settings():
    return _current_settings().to_dict()


@router.post("/settings")
async def post_settings(body: dict):
    """Update account balance and/or currency.

    Validates before applying. Returns the updated settings.
    """
    current = _current_settings()
    errors = []
    balance = current.balance
    currency = current.currency

    if "balance" in body:
        try:
            balance = float(body["balance"])
        except (TypeError, ValueError):
            errors.append("balance must be a number")
        else:
            if balance < 0:
                errors.append("balance must be non-negative")

    if "currency" in body:
        currency = str(body["currency"]).upper()
        if len(currency) != 3 or not currency.isalpha():
            errors.append("currency must be a 3-letter code")

    if errors:
        return {"status": "error", "errors": errors}

    updated = AccountSettings(balance=balance, currency=currency)
    if _settings_repo is not None:
        _settings_repo.save_settings(updated)
    logger.info("Account settings updated: balance=%.2f %s", balance, currency)
    return {"status": "ok", "settings": updated.to_dict()}


# ── Dashboard ────────────────────────────────────────────────────────────


@router.get("/stats")
async def get_stats():
    """Return net PnL, win rate, current balance, and chart data."""
    trades = _trade_repo.list_trades() if _trade_repo is not None else []
    return journal_stats(trades, _current_settings().balance)


@router.post("/analysis")
async def post_analysis():
    """Run the AI journal review; always returns a report."""
    trades = _trade_repo.list_trades() if _trade_repo is not None else []
    config = _config if _config is not None else default_config()
    result = await analyze_journal(trades, _current_settings().balance, config)
    return result.to_dict()
