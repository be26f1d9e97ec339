"""Trade repository — SQLite CRUD for the journal's trades table."""

import logging

from luxtrade.journal.models import Trade
from luxtrade.repos.db import get_connection

logger = logging.getLogger("luxtrade")

_COLUMNS = (
    "id", "date", "pair", "type", "entry_price", "exit_price",
    "lot_size", "pnl", "status", "notes", "setup",
)


def _row_to_trade(row) -> Trade:
    return Trade(**{name: row[name] for name in _COLUMNS})


class TradeRepo:
    """Data access layer for journal trades, newest first.

    Args:
        db_path: Path to the SQLite database file.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    # ── Write ────────────────────────────────────────────────────────────

    def add_trade(self, trade: Trade) -> list[Trade]:
        """Insert *trade* and return the updated journal.

        Raises:
            ValueError: If a trade with the same ``id`` already exists.
        """
        conn = get_connection(self._db_path)
        try:
            exists = conn.execute(
                "SELECT 1 FROM trades WHERE id = ?", (trade.id,)
            ).fetchone()
            if exists:
                raise ValueError(f"trade {trade.id} already exists")
            conn.execute(
                f"""
                INSERT INTO trades ({", ".join(_COLUMNS)})
                VALUES ({", ".join("?" for _ in _COLUMNS)})
                """,
                tuple(getattr(trade, name) for name in _COLUMNS),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Journaled trade %s: %s %s pnl=%.2f",
                    trade.id, trade.type, trade.pair, trade.pnl)
        return self.list_trades()

    def delete_trade(self, trade_id: str) -> list[Trade]:
        """Remove the trade with *trade_id* (if any) and return the journal."""
        conn = get_connection(self._db_path)
        try:
            cur = conn.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            if cur.rowcount:
                logger.info("Deleted trade %s", trade_id)
        finally:
            conn.close()
        return self.list_trades()

    # ── Read ─────────────────────────────────────────────────────────────

    def list_trades(self, limit: int | None = None) -> list[Trade]:
        """Return journaled trades, most recently added first."""
        conn = get_connection(self._db_path)
        try:
            sql = f"SELECT {', '.join(_COLUMNS)} FROM trades ORDER BY seq DESC"
            params: tuple = ()
            if limit is not None:
                sql += " LIMIT ?"
                params = (limit,)
            rows = conn.execute(sql, params).fetchall()
            return [_row_to_trade(row) for row in rows]
        finally:
            conn.close()
