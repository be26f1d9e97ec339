"""Static instrument catalog.

Defined once at import time; lookups never fail and fall back to the
first entry for unknown symbols.
"""

from luxtrade.calculator.models import AssetClass, Instrument


REFERENCE_USDJPY = 158.00

# Broker models for special indices (multiplier per 1.0 lot)
CONTRACT_SIZE_MICRO = 1
CONTRACT_SIZE_MINI = 100
CONTRACT_SIZE_STANDARD = 1000
CONTRACT_SIZE_CHOICES = (
    CONTRACT_SIZE_MICRO,
    CONTRACT_SIZE_MINI,
    CONTRACT_SIZE_STANDARD,
)

INSTRUMENTS: tuple[Instrument, ...] = (
    Instrument("EURUSD", AssetClass.FOREX, 100_000, 0.0001,
               base_currency="EUR", quote_currency="USD"),
    Instrument("GBPUSD", AssetClass.FOREX, 100_000, 0.0001,
               base_currency="GBP", quote_currency="USD"),
    Instrument("USDJPY", AssetClass.FOREX, 100_000, 0.01,
               base_currency="USD", quote_currency="JPY"),
    Instrument("EURJPY", AssetClass.FOREX, 100_000, 0.01,
               base_currency="EUR", quote_currency="JPY"),
    Instrument("USDMXN", AssetClass.FOREX, 100_000, 0.0001,
               base_currency="USD", quote_currency="MXN",
               non_linear_pnl=True),
    Instrument("US30", AssetClass.INDEX, 1, 1),
    Instrument("NAS100", AssetClass.INDEX, 1, 1),
    Instrument("SPX500", AssetClass.INDEX, 1, 1,
               special_contract_index=True),
    # 100 JPY per point per 1.0 lot
    Instrument("225JPY", AssetClass.INDEX, 100, 1,
               quote_currency="JPY", special_contract_index=True),
    Instrument("XAUUSD", AssetClass.METAL, 100, 0.01,
               base_currency="XAU", quote_currency="USD"),
    Instrument("BTCUSD", AssetClass.CRYPTO, 1, 1,
               base_currency="BTC", quote_currency="USD"),
)

_BY_SYMBOL: dict[str, Instrument] = {i.symbol: i for i in INSTRUMENTS}

DEFAULT_ENTRY_PRICES: dict[str, float] = {
    "EURUSD": 1.0850,
    "US30": 39500,
    "NAS100": 18200,
    "SPX500": 5230,
    "225JPY": 39000.0,
    "XAUUSD": 2350,
    "USDJPY": 158.00,
    "EURJPY": 171.50,
    "USDMXN": 17.07,
}


def list_instruments() -> list[Instrument]:
    """Return the catalog in display order."""
    return list(INSTRUMENTS)


def get_instrument(symbol: str) -> Instrument:
    """Look up *symbol*, falling back to the first catalog entry."""
    return _BY_SYMBOL.get(symbol, INSTRUMENTS[0])


def default_entry_price(symbol: str) -> float:
    return float(DEFAULT_ENTRY_PRICES.get(symbol, 0))


def default_stop_distance(instrument: Instrument) -> float:
    """Initial stop-loss distance: 50 points for indices, 20 pips otherwise."""
    return 50.0 if instrument.is_index else 20.0
