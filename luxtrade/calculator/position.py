"""Position calculator — pure math, no I/O.

Turns an instrument, a direction, risk inputs, and price levels into
lot size, dollar risk, dollar reward, R:R, and value per pip/point.

Two pricing branches:

Non-linear (quote currency is neither USD nor JPY, e.g. USD/MXN):
    PnL = units × price change / closing price, so dollar risk depends
    on where the trade exits.

Linear (everything else):
    A fixed dollar value per pip/point per lot is derived once::

        risk   = lots × sl_distance × unit_value
        reward = lots × tp_distance × unit_value

Never raises: malformed or zero inputs are coerced to safe defaults so
the caller always gets something displayable.
"""

import math
import re
from typing import Optional

from luxtrade.calculator.instruments import REFERENCE_USDJPY
from luxtrade.calculator.rounding import to_fixed
from luxtrade.calculator.models import (
    AssetClass,
    CalculationResult,
    Direction,
    Instrument,
    Number,
    PriceLevels,
    RiskInputs,
    RiskMode,
)


MIN_LOTS = 0.01
DEFAULT_LOTS = 0.01
DEFAULT_RISK_AMOUNT = 10.0
# Legacy value per pip for USD-base pairs when no entry price is known
USD_BASE_FALLBACK_UNIT_VALUE = 0.63

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def to_number(value: Number, default: float) -> float:
    """Parse *value* leniently, returning *default* when it is missing,
    unparsable, NaN, or zero.

    Strings are read up to the first non-numeric character, so
    ``"12.5 usd"`` parses as ``12.5``.  The word
    ``"Infinity"`` is not recognised as a number and reads as *default*.
    """
    if value is None:
        return default
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match is None:
            return default
        number = float(match.group(0))
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
    if math.isnan(number) or number == 0:
        return default
    return number


def _field(value: Number) -> float:
    """Coerce a price/distance field; blanks read as zero."""
    return to_number(value, 0.0)


def size_lots(risk_amount: float, sl_distance: float, unit_value: float) -> float:
    """Lots that risk *risk_amount* over *sl_distance*, floored to 0.01.

    Falls back to the minimum lot when the distance or unit value is not
    positive.
    """
    if sl_distance > 0 and unit_value > 0:
        raw = risk_amount / (sl_distance * unit_value)
    else:
        raw = DEFAULT_LOTS
    return max(MIN_LOTS, math.floor(raw * 100) / 100)


def linear_unit_value(
    instrument: Instrument,
    entry_price: float = 0.0,
    contract_size_override: Optional[int] = None,
    usd_jpy_rate: float = REFERENCE_USDJPY,
) -> float:
    """Dollar value of one pip/point for 1.0 lot.

    Args:
        instrument: Catalog instrument.
        entry_price: Used to convert USD-base pairs into dollars.
        contract_size_override: Broker multiplier; honoured only for
            special-contract indices.
        usd_jpy_rate: Reference rate for JPY-quoted products.
    """
    if instrument.is_index:
        multiplier = instrument.contract_size
        if instrument.special_contract_index and contract_size_override:
            multiplier = contract_size_override
        value = multiplier * instrument.pip_size
        if instrument.quote_currency == "JPY":
            return value / usd_jpy_rate
        return value

    pip_value_in_quote = instrument.contract_size * instrument.pip_size
    if instrument.asset_class is AssetClass.FOREX:
        if instrument.quote_currency == "USD":
            return pip_value_in_quote
        if instrument.quote_currency == "JPY":
            return pip_value_in_quote / usd_jpy_rate
        if instrument.base_currency == "USD":
            if entry_price > 0:
                return pip_value_in_quote / entry_price
            return USD_BASE_FALLBACK_UNIT_VALUE

    # Metals and crypto are already quoted in dollars
    return pip_value_in_quote


def format_risk_reward(risk: float, reward: float) -> str:
    """R:R as ``"N"`` (read 1:N) to two decimals, ``"0"`` without risk."""
    if risk > 0:
        return to_fixed(reward / risk, 2)
    return "0"


def _compute_non_linear(
    instrument: Instrument,
    direction: Direction,
    mode: RiskMode,
    lot_size: float,
    risk_amount: float,
    entry: float,
    sl_price: float,
    sl_distance: float,
    tp_price: float,
) -> tuple[float, float, float, float]:
    pip_value_in_quote = instrument.contract_size * instrument.pip_size
    # Sizing approximates with the entry price; settlement below uses the
    # exit price. Both are kept as-is.
    approx_unit_value = pip_value_in_quote / entry if entry > 0 else 0.0

    if mode is RiskMode.RISK:
        lots = size_lots(risk_amount, sl_distance, approx_unit_value)
    else:
        lots = lot_size

    units = lots * instrument.contract_size
    if direction is Direction.BUY:
        risk = abs((entry - sl_price) * units / sl_price) if sl_price > 0 else 0.0
        reward = abs((tp_price - entry) * units / tp_price) if tp_price > 0 else 0.0
    else:
        risk = abs((sl_price - entry) * units / sl_price) if sl_price > 0 else 0.0
        reward = abs((entry - tp_price) * units / tp_price) if tp_price > 0 else 0.0

    return lots, risk, reward, lots * approx_unit_value


def compute(
    instrument: Instrument,
    direction: Direction,
    risk_inputs: RiskInputs,
    levels: PriceLevels,
    contract_size_override: Optional[int] = None,
    usd_jpy_rate: float = REFERENCE_USDJPY,
) -> CalculationResult:
    """Size a trade and price its risk and reward.

    In ``RISK`` mode lots are derived from the dollar risk and the
    stop-loss distance; in ``LOTS`` mode the entered lot size is used
    as-is.
    """
    lot_size = to_number(risk_inputs.lot_size, DEFAULT_LOTS)
    risk_amount = to_number(risk_inputs.risk_amount_usd, DEFAULT_RISK_AMOUNT)
    mode = RiskMode(risk_inputs.mode)
    direction = Direction(direction)

    entry = _field(levels.entry_price)
    sl_distance = _field(levels.stop_loss_distance)
    tp_distance = _field(levels.take_profit_distance)

    if instrument.non_linear_pnl:
        lots, risk, reward, value_per_unit = _compute_non_linear(
            instrument, direction, mode, lot_size, risk_amount,
            entry=entry,
            sl_price=_field(levels.stop_loss_price),
            sl_distance=sl_distance,
            tp_price=_field(levels.take_profit_price),
        )
    else:
        unit_value = linear_unit_value(
            instrument, entry, contract_size_override, usd_jpy_rate,
        )
        if mode is RiskMode.RISK:
            lots = size_lots(risk_amount, sl_distance, unit_value)
        else:
            lots = lot_size
        risk = lots * sl_distance * unit_value
        reward = lots * tp_distance * unit_value
        value_per_unit = lots * unit_value

    return CalculationResult(
        lots=lots,
        risk_usd=risk,
        reward_usd=reward,
        risk_reward_ratio=format_risk_reward(risk, reward),
        value_per_unit_usd=value_per_unit,
    )
