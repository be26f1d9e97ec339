"""CLI report — prints a position calculation to the console."""

from luxtrade.calculator.models import CalculationResult, Instrument, PriceLevels


def print_calculation(
    instrument: Instrument,
    levels: PriceLevels,
    result: CalculationResult,
) -> str:
    """Format and print a position summary.

    Args:
        instrument: The instrument the calculation was run for.
        levels: Entry, stop-loss, and take-profit used.
        result: Output of ``compute()``.

    Returns:
        The formatted string (also printed to stdout).
    """
    precision = instrument.price_precision
    unit = instrument.unit_label
    pricing = "Non-linear" if instrument.non_linear_pnl else "Linear"

    lines = [
        f"──────────────── {instrument.symbol} {levels.direction.value} ────────────────",
        f"  Entry:           {levels.entry_price:.{precision}f}",
        f"  Stop Loss:       {levels.stop_loss_price:.{precision}f}"
        f" ({levels.stop_loss_distance:g} {unit})",
        f"  Take Profit:     {levels.take_profit_price:.{precision}f}"
        f" ({levels.take_profit_distance:g} {unit})",
        f"  Lots:            {result.lots:.2f}",
        f"  Risk:            ${result.risk_usd:,.2f}",
        f"  Reward:          ${result.reward_usd:,.2f}",
        f"  Risk/Reward:     1 : {result.risk_reward_ratio}",
        f"  Value per {unit[:-1]}:  ${result.value_per_unit_usd:.5f}",
        f"  Pricing:         {pricing}",
        "──────────────────────────────────────────────────",
    ]
    output = "\n".join(lines)
    print(output)
    return output
