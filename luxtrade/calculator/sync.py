"""Field synchronisation — stateless conversions between linked fields.

Each conversion has an inverse sibling:

    distance_to_price  <->  price_to_distance
    risk_amount_to_percent  <->  risk_percent_to_amount

Distances are unsigned magnitudes in pips/points.  Converting a price
back to a distance discards which side of entry it sits on.
"""

from typing import Optional

from luxtrade.calculator.models import Direction, Instrument, PriceLevels
from luxtrade.calculator.rounding import round_half_up


DISTANCE_PRECISION = 1


def distance_to_price(
    distance: float,
    entry_price: float,
    pip_size: float,
    direction: Direction,
    precision: Optional[int] = None,
    take_profit: bool = False,
) -> float:
    """Price *distance* pips/points away from entry.

    Stop-losses sit below entry for BUY and above for SELL; take-profits
    are mirrored (``take_profit=True``).
    """
    offset = distance * pip_size
    below = Direction(direction) is Direction.BUY
    if take_profit:
        below = not below
    price = entry_price - offset if below else entry_price + offset
    if precision is not None:
        return round_half_up(price, precision)
    return price


def price_to_distance(price: float, entry_price: float, pip_size: float) -> float:
    """Unsigned distance in pips/points between *price* and entry."""
    if pip_size <= 0:
        return 0.0
    return round_half_up(abs(entry_price - price) / pip_size, DISTANCE_PRECISION)


def risk_amount_to_percent(amount: float, balance: float) -> float:
    """Dollar risk as a percent of *balance*; unchanged when balance ≤ 0."""
    if balance <= 0:
        return amount
    return amount / balance * 100


def risk_percent_to_amount(percent: float, balance: float) -> float:
    """Percent risk as dollars of *balance*; unchanged when balance ≤ 0."""
    if balance <= 0:
        return percent
    return percent / 100 * balance


def derive_levels(
    instrument: Instrument,
    direction: Direction,
    entry_price: float,
    stop_loss_distance: float,
    take_profit_distance: float,
) -> PriceLevels:
    """Build price levels treating distances as the source of truth.

    Used on direction flips, entry edits, and instrument selection.
    """
    precision = instrument.price_precision
    return PriceLevels(
        entry_price=entry_price,
        stop_loss_price=distance_to_price(
            stop_loss_distance, entry_price, instrument.pip_size,
            direction, precision,
        ),
        stop_loss_distance=stop_loss_distance,
        take_profit_price=distance_to_price(
            take_profit_distance, entry_price, instrument.pip_size,
            direction, precision, take_profit=True,
        ),
        take_profit_distance=take_profit_distance,
        direction=Direction(direction),
    )
