"""Calculator data models — instruments, inputs, and results.

All records are immutable; the calculator derives a fresh
``CalculationResult`` on every input change and never stores it.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Union


Number = Union[float, int, str, None]


class AssetClass(str, Enum):
    FOREX = "FOREX"
    INDEX = "INDEX"
    METAL = "METAL"
    CRYPTO = "CRYPTO"


class Direction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class RiskMode(str, Enum):
    """Which input is authoritative: dollar risk or lot size."""

    RISK = "RISK"
    LOTS = "LOTS"


@dataclass(frozen=True)
class Instrument:
    """A tradable symbol with its contract specification."""

    symbol: str
    asset_class: AssetClass
    contract_size: float  # units per 1.0 lot
    pip_size: float  # one pip (forex/metal) or point (index)
    quote_currency: str = "USD"
    base_currency: Optional[str] = None
    special_contract_index: bool = False  # broker-dependent contract size
    non_linear_pnl: bool = False  # PnL settles in a non-USD quote currency

    @property
    def is_index(self) -> bool:
        return self.asset_class is AssetClass.INDEX

    @property
    def unit_label(self) -> str:
        return "Points" if self.is_index else "Pips"

    @property
    def price_precision(self) -> int:
        """Decimal places used when displaying prices."""
        if self.special_contract_index:
            return 2
        if self.quote_currency == "JPY" or self.pip_size >= 0.01:
            return 2
        return 5


@dataclass(frozen=True)
class RiskInputs:
    """Risk-side inputs; ``mode`` selects which of them is authoritative.

    Values may be raw strings as typed by the user; the calculator
    coerces them.
    """

    mode: RiskMode = RiskMode.LOTS
    risk_amount_usd: Number = 10.0
    risk_percent: Number = 0.1
    lot_size: Number = 0.01


@dataclass(frozen=True)
class PriceLevels:
    """Entry, stop-loss, and take-profit as both prices and distances."""

    entry_price: float
    stop_loss_price: float
    stop_loss_distance: float
    take_profit_price: float
    take_profit_distance: float
    direction: Direction = Direction.BUY


@dataclass(frozen=True)
class CalculationResult:
    lots: float
    risk_usd: float
    reward_usd: float
    risk_reward_ratio: str  # "N" meaning 1:N, "0" when risk is zero
    value_per_unit_usd: float

    def to_dict(self) -> dict:
        return asdict(self)
