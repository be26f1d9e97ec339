"""Calculator form state and edit handlers.

The form is an immutable snapshot of every field on the calculator
screen.  Each ``set_*`` handler applies one edit and re-derives only the
fields linked to it, returning a new form.  Exactly one field of each
linked pair is the source of truth per edit; nothing cascades further.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

from luxtrade.calculator import sync
from luxtrade.calculator.instruments import (
    CONTRACT_SIZE_CHOICES,
    CONTRACT_SIZE_MINI,
    REFERENCE_USDJPY,
    default_entry_price,
    default_stop_distance,
    get_instrument,
)
from luxtrade.calculator.models import (
    CalculationResult,
    Direction,
    Instrument,
    Number,
    PriceLevels,
    RiskInputs,
    RiskMode,
)
from luxtrade.calculator.position import compute
from luxtrade.calculator.rounding import to_fixed


@dataclass(frozen=True)
class CalculatorForm:
    symbol: str
    direction: Direction
    balance: float
    mode: RiskMode
    risk_amount: Number
    risk_percent: Number
    lot_size: Number
    levels: PriceLevels
    contract_size: Optional[int] = None

    @property
    def instrument(self) -> Instrument:
        return get_instrument(self.symbol)

    @property
    def risk_inputs(self) -> RiskInputs:
        return RiskInputs(
            mode=self.mode,
            risk_amount_usd=self.risk_amount,
            risk_percent=self.risk_percent,
            lot_size=self.lot_size,
        )


def new_form(balance: float, symbol: str = "225JPY") -> CalculatorForm:
    """Initial screen state: SELL, LOTS mode, 0.06 lots, $10 / 0.1 % risk."""
    form = CalculatorForm(
        symbol=symbol,
        direction=Direction.SELL,
        balance=balance,
        mode=RiskMode.LOTS,
        risk_amount="10",
        risk_percent="0.1",
        lot_size="0.06",
        levels=PriceLevels(0.0, 0.0, 20.0, 0.0, 40.0, Direction.SELL),
        contract_size=CONTRACT_SIZE_MINI,
    )
    return select_instrument(form, symbol)


def select_instrument(form: CalculatorForm, symbol: str) -> CalculatorForm:
    """Switch instrument and reset entry, distances, and contract size."""
    instrument = get_instrument(symbol)
    stop = default_stop_distance(instrument)
    if instrument.special_contract_index:
        contract_size = CONTRACT_SIZE_MINI
    elif instrument.is_index:
        contract_size = int(instrument.contract_size)
    else:
        contract_size = form.contract_size
    levels = sync.derive_levels(
        instrument, form.direction, default_entry_price(instrument.symbol),
        stop, stop * 2,
    )
    return replace(
        form, symbol=instrument.symbol, levels=levels,
        contract_size=contract_size,
    )


def _relevel(form: CalculatorForm, direction: Direction, entry: float) -> CalculatorForm:
    levels = sync.derive_levels(
        form.instrument, direction, entry,
        form.levels.stop_loss_distance, form.levels.take_profit_distance,
    )
    return replace(form, direction=direction, levels=levels)


def set_direction(form: CalculatorForm, direction: Direction) -> CalculatorForm:
    """Flip BUY/SELL, keeping distances and moving the prices."""
    return _relevel(form, Direction(direction), form.levels.entry_price)


def set_entry_price(form: CalculatorForm, price: float) -> CalculatorForm:
    return _relevel(form, form.direction, price)


def set_stop_loss_distance(form: CalculatorForm, distance: float) -> CalculatorForm:
    instrument = form.instrument
    price = sync.distance_to_price(
        distance, form.levels.entry_price, instrument.pip_size,
        form.direction, instrument.price_precision,
    )
    levels = replace(form.levels, stop_loss_distance=distance, stop_loss_price=price)
    return replace(form, levels=levels)


def set_stop_loss_price(form: CalculatorForm, price: float) -> CalculatorForm:
    distance = sync.price_to_distance(
        price, form.levels.entry_price, form.instrument.pip_size,
    )
    levels = replace(form.levels, stop_loss_price=price, stop_loss_distance=distance)
    return replace(form, levels=levels)


def set_take_profit_distance(form: CalculatorForm, distance: float) -> CalculatorForm:
    instrument = form.instrument
    price = sync.distance_to_price(
        distance, form.levels.entry_price, instrument.pip_size,
        form.direction, instrument.price_precision, take_profit=True,
    )
    levels = replace(form.levels, take_profit_distance=distance, take_profit_price=price)
    return replace(form, levels=levels)


def set_take_profit_price(form: CalculatorForm, price: float) -> CalculatorForm:
    distance = sync.price_to_distance(
        price, form.levels.entry_price, form.instrument.pip_size,
    )
    levels = replace(form.levels, take_profit_price=price, take_profit_distance=distance)
    return replace(form, levels=levels)


def _parse(value: Number) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def set_risk_amount(form: CalculatorForm, value: Number) -> CalculatorForm:
    """Make dollar risk authoritative and re-derive the percent.

    The percent is left untouched when *value* is not a number or the
    balance is not positive.
    """
    form = replace(form, mode=RiskMode.RISK, risk_amount=value)
    amount = _parse(value)
    if amount is None or form.balance <= 0:
        return form
    percent = sync.risk_amount_to_percent(amount, form.balance)
    return replace(form, risk_percent=to_fixed(percent, 2))


def set_risk_percent(form: CalculatorForm, value: Number) -> CalculatorForm:
    """Make percent risk authoritative and re-derive the dollar amount."""
    form = replace(form, mode=RiskMode.RISK, risk_percent=value)
    percent = _parse(value)
    if percent is None or form.balance <= 0:
        return form
    amount = sync.risk_percent_to_amount(percent, form.balance)
    return replace(form, risk_amount=to_fixed(amount, 2))


def set_lot_size(form: CalculatorForm, value: Number) -> CalculatorForm:
    return replace(form, mode=RiskMode.LOTS, lot_size=value)


def set_contract_size(form: CalculatorForm, contract_size: int) -> CalculatorForm:
    """Pick the broker model (MICRO 1, MINI 100, STANDARD 1000).

    Raises:
        ValueError: If *contract_size* is not one of the broker models.
    """
    if contract_size not in CONTRACT_SIZE_CHOICES:
        raise ValueError(
            f"contract_size must be one of {CONTRACT_SIZE_CHOICES}, got {contract_size}"
        )
    return replace(form, contract_size=int(contract_size))


def set_balance(form: CalculatorForm, balance: float) -> CalculatorForm:
    return replace(form, balance=balance)


def calculate(
    form: CalculatorForm,
    usd_jpy_rate: float = REFERENCE_USDJPY,
) -> CalculationResult:
    return compute(
        form.instrument,
        form.direction,
        form.risk_inputs,
        form.levels,
        contract_size_override=form.contract_size,
        usd_jpy_rate=usd_jpy_rate,
    )
