"""Settings repository — key-value storage for account settings."""

import json

from luxtrade.journal.models import AccountSettings
from luxtrade.repos.db import get_connection


_SETTINGS_KEY = "account"


class SettingsRepo:
    """Reads and writes ``AccountSettings`` as a single JSON record.

    Args:
        db_path: Path to the SQLite database file.
        defaults: Returned by ``get_settings`` until something is saved.
    """

    def __init__(self, db_path: str, defaults: AccountSettings | None = None) -> None:
        self._db_path = db_path
        self._defaults = defaults or AccountSettings()

    def get_settings(self) -> AccountSettings:
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (_SETTINGS_KEY,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return self._defaults
        data = json.loads(row["value"])
        return AccountSettings(
            balance=float(data.get("balance", self._defaults.balance)),
            currency=data.get("currency", self._defaults.currency),
        )

    def save_settings(self, settings: AccountSettings) -> None:
        """Persist *settings*, replacing any previous record.

        Raises:
            ValueError: If the balance is negative.
        """
        if settings.balance < 0:
            raise ValueError(f"balance must be non-negative, got {settings.balance}")
        conn = get_connection(self._db_path)
        try:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (_SETTINGS_KEY, json.dumps(settings.to_dict())),
            )
            conn.commit()
        finally:
            conn.close()
