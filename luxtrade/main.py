"""LuxTrade — application entry point.

Boots the FastAPI internal server and provides the CLI entry point for
serving the API or running a one-off position calculation.
"""

import logging

from fastapi import FastAPI

from luxtrade.api.routers import router

app = FastAPI(title="LuxTrade Internal API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("luxtrade")


@app.get("/health")
async def health():
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="LuxTrade position-size calculator")
    parser.add_argument(
        "--mode",
        choices=["serve", "calc"],
        default="serve",
        help="Run the API server or a single calculation (default: serve)",
    )
    parser.add_argument("--symbol", default="EURUSD", help="Instrument symbol")
    parser.add_argument("--direction", choices=["BUY", "SELL"], default="BUY")
    parser.add_argument("--entry", type=float, help="Entry price (default: catalog price)")
    parser.add_argument("--sl", type=float, help="Stop-loss distance in pips/points")
    parser.add_argument("--tp", type=float, help="Take-profit distance in pips/points")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--lots", type=float, help="Lot size (LOTS mode)")
    group.add_argument("--risk", type=float, help="Dollar risk (RISK mode)")
    group.add_argument("--risk-pct", type=float, help="Percent of balance at risk (RISK mode)")
    parser.add_argument(
        "--contract-size",
        type=int,
        choices=[1, 100, 1000],
        help="Broker model for special indices: 1, 100 or 1000",
    )
    return parser


def _run_calc(args, config) -> None:
    """Run one calculation through the calculator form handlers."""
    from luxtrade.calculator import form as calc_form
    from luxtrade.cli.report import print_calculation
    from luxtrade.journal.models import AccountSettings
    from luxtrade.repos.db import init_db
    from luxtrade.repos.settings_repo import SettingsRepo

    init_db(config.db_path)
    settings = SettingsRepo(
        config.db_path,
        defaults=AccountSettings(config.default_balance, config.default_currency),
    ).get_settings()

    form = calc_form.new_form(settings.balance, args.symbol)
    form = calc_form.set_direction(form, args.direction)
    if args.entry is not None:
        form = calc_form.set_entry_price(form, args.entry)
    if args.sl is not None:
        form = calc_form.set_stop_loss_distance(form, args.sl)
    if args.tp is not None:
        form = calc_form.set_take_profit_distance(form, args.tp)
    if args.contract_size is not None:
        form = calc_form.set_contract_size(form, args.contract_size)
    if args.lots is not None:
        form = calc_form.set_lot_size(form, args.lots)
    elif args.risk is not None:
        form = calc_form.set_risk_amount(form, args.risk)
    elif args.risk_pct is not None:
        form = calc_form.set_risk_percent(form, args.risk_pct)

    result = calc_form.calculate(form, config.usd_jpy_rate)
    print_calculation(form.instrument, form.levels, result)


def _run_server(config) -> None:
    """Wire repositories into the routers and serve the API."""
    import uvicorn

    from luxtrade.api.routers import configure_routers
    from luxtrade.journal.models import AccountSettings
    from luxtrade.repos.db import init_db
    from luxtrade.repos.settings_repo import SettingsRepo
    from luxtrade.repos.trade_repo import TradeRepo

    init_db(config.db_path)
    configure_routers(
        trade_repo=TradeRepo(config.db_path),
        settings_repo=SettingsRepo(
            config.db_path,
            defaults=AccountSettings(config.default_balance, config.default_currency),
        ),
        config=config,
    )

    logger.info("LuxTrade API available at http://localhost:%d", config.api_port)
    uvicorn.run(app, host="0.0.0.0", port=config.api_port, log_level="info")


def _run_cli() -> None:
    """Parse CLI arguments and dispatch to the appropriate mode."""
    from luxtrade.config import load_config

    args = _build_parser().parse_args()
    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.mode == "calc":
        _run_calc(args, config)
    else:
        _run_server(config)


if __name__ == "__main__":
    _run_cli()
