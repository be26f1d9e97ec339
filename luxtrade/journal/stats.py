"""Journal statistics for the dashboard — pure math, no I/O."""

from luxtrade.journal.models import Trade


CHART_TRADES = 10


def journal_stats(trades: list[Trade], balance: float) -> dict:
    """Summarise a newest-first trade list.

    Returns:
        Dict with ``net_pnl``, ``wins``, ``losses``, ``win_rate`` (percent),
        ``current_balance`` and ``chart`` — the last ten trades oldest
        first, each ``{"name": "MM-DD", "pnl": float}``.
    """
    net_pnl = sum(t.pnl for t in trades)
    wins = sum(1 for t in trades if t.pnl > 0)
    losses = sum(1 for t in trades if t.pnl < 0)
    win_rate = (wins / len(trades)) * 100 if trades else 0.0

    chart = [
        {"name": t.date[5:], "pnl": t.pnl}
        for t in reversed(trades[:CHART_TRADES])
    ]

    return {
        "net_pnl": net_pnl,
        "wins": wins,
        "losses": losses,
        "total_trades": len(trades),
        "win_rate": win_rate,
        "current_balance": balance + net_pnl,
        "chart": chart,
    }
