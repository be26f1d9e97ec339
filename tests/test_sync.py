"""Tests for field synchronisation and the calculator form handlers."""

import pytest

from luxtrade.calculator import form as calc_form
from luxtrade.calculator.instruments import get_instrument
from luxtrade.calculator.models import Direction, RiskMode
from luxtrade.calculator.sync import (
    derive_levels,
    distance_to_price,
    price_to_distance,
    risk_amount_to_percent,
    risk_percent_to_amount,
)


# ── Distance ↔ price ─────────────────────────────────────────────────────


class TestDistancePrice:
    def test_buy_stop_below_entry(self):
        """1.0850 − 20 × 0.0001 = 1.0830."""
        price = distance_to_price(20, 1.0850, 0.0001, Direction.BUY, precision=5)
        assert price == pytest.approx(1.0830)

    def test_sell_stop_above_entry(self):
        price = distance_to_price(20, 1.0850, 0.0001, Direction.SELL, precision=5)
        assert price == pytest.approx(1.0870)

    def test_take_profit_mirrors_stop(self):
        buy_tp = distance_to_price(40, 1.0850, 0.0001, Direction.BUY, take_profit=True)
        sell_tp = distance_to_price(40, 1.0850, 0.0001, Direction.SELL, take_profit=True)
        assert buy_tp == pytest.approx(1.0890)
        assert sell_tp == pytest.approx(1.0810)

    def test_rounds_to_precision(self):
        price = distance_to_price(3, 158.004, 0.01, Direction.BUY, precision=2)
        assert price == 157.97

    @pytest.mark.parametrize("distance", [0, 5, 20, 37.5, 150])
    @pytest.mark.parametrize("direction", [Direction.BUY, Direction.SELL])
    def test_round_trip(self, distance, direction):
        price = distance_to_price(distance, 1.0850, 0.0001, direction)
        assert price_to_distance(price, 1.0850, 0.0001) == pytest.approx(distance)

    @pytest.mark.parametrize("distance", [0, 12, 50, 275.5])
    def test_round_trip_index(self, distance):
        price = distance_to_price(distance, 39000, 1, Direction.SELL, take_profit=True)
        assert price_to_distance(price, 39000, 1) == pytest.approx(distance)

    def test_distance_is_unsigned(self):
        above = price_to_distance(1.0870, 1.0850, 0.0001)
        below = price_to_distance(1.0830, 1.0850, 0.0001)
        assert above == below == pytest.approx(20.0)

    def test_distance_rounds_to_one_decimal(self):
        assert price_to_distance(1.08312, 1.0850, 0.0001) == 18.8

    def test_zero_pip_size(self):
        assert price_to_distance(1.0, 2.0, 0) == 0.0

    def test_distance_halfway_rounds_up(self):
        """2.25 points rounds to 2.3, not the even 2.2."""
        assert price_to_distance(38997.75, 39000.0, 1) == 2.3

    def test_price_halfway_rounds_up(self):
        # 2.125 − 1 × 1 = 1.125 exactly
        assert distance_to_price(1, 2.125, 1, Direction.BUY, precision=2) == 1.13


# ── Risk amount ↔ percent ────────────────────────────────────────────────


class TestRiskPercent:
    def test_amount_to_percent(self):
        assert risk_amount_to_percent(10, 10_000) == pytest.approx(0.1)

    def test_percent_to_amount(self):
        assert risk_percent_to_amount(1.5, 10_000) == pytest.approx(150.0)

    @pytest.mark.parametrize("amount", [0.5, 10, 33.33, 250, 9_999])
    @pytest.mark.parametrize("balance", [3, 1_000, 12_345.67])
    def test_round_trip(self, amount, balance):
        percent = risk_amount_to_percent(amount, balance)
        assert risk_percent_to_amount(percent, balance) == pytest.approx(amount)

    @pytest.mark.parametrize("balance", [0, -500])
    def test_no_op_without_balance(self, balance):
        assert risk_amount_to_percent(25, balance) == 25
        assert risk_percent_to_amount(2, balance) == 2


# ── Derived levels ───────────────────────────────────────────────────────


class TestDeriveLevels:
    def test_direction_round_trip_restores_prices(self):
        inst = get_instrument("XAUUSD")
        buy = derive_levels(inst, Direction.BUY, 2350, 300, 600)
        sell = derive_levels(inst, Direction.SELL, 2350, 300, 600)
        back = derive_levels(inst, Direction.BUY, 2350, 300, 600)
        assert sell.stop_loss_price == pytest.approx(2353.0)
        assert sell.take_profit_price == pytest.approx(2344.0)
        assert back == buy

    def test_eurusd_levels(self):
        levels = derive_levels(get_instrument("EURUSD"), Direction.BUY, 1.0850, 20, 40)
        assert levels.stop_loss_price == pytest.approx(1.0830)
        assert levels.take_profit_price == pytest.approx(1.0890)
        assert levels.direction is Direction.BUY


# ── Calculator form ──────────────────────────────────────────────────────


class TestCalculatorForm:
    def test_initial_state(self):
        form = calc_form.new_form(10_000)
        assert form.symbol == "225JPY"
        assert form.direction is Direction.SELL
        assert form.mode is RiskMode.LOTS
        assert form.contract_size == 100
        assert form.levels.entry_price == 39000
        assert form.levels.stop_loss_distance == 50
        assert form.levels.take_profit_distance == 100
        assert form.levels.stop_loss_price == pytest.approx(39050)
        assert form.levels.take_profit_price == pytest.approx(38900)

    def test_initial_calculation(self):
        """0.06 lots × 50 pts × (100 / 158) $/pt ≈ $1.90."""
        result = calc_form.calculate(calc_form.new_form(10_000))
        assert result.lots == pytest.approx(0.06)
        assert result.risk_usd == pytest.approx(0.06 * 50 * 100 / 158)
        assert result.risk_reward_ratio == "2.00"

    def test_select_forex_resets_to_pip_defaults(self):
        form = calc_form.select_instrument(calc_form.new_form(10_000), "EURUSD")
        assert form.levels.entry_price == pytest.approx(1.0850)
        assert form.levels.stop_loss_distance == 20
        assert form.levels.take_profit_distance == 40
        # SELL: stop above, target below
        assert form.levels.stop_loss_price == pytest.approx(1.0870)
        assert form.levels.take_profit_price == pytest.approx(1.0810)

    def test_select_plain_index_uses_catalog_contract(self):
        form = calc_form.select_instrument(calc_form.new_form(10_000), "US30")
        assert form.contract_size == 1
        assert form.levels.stop_loss_distance == 50

    def test_select_special_index_defaults_to_mini(self):
        form = calc_form.new_form(10_000, "EURUSD")
        form = calc_form.set_contract_size(form, 1000)
        form = calc_form.select_instrument(form, "SPX500")
        assert form.contract_size == 100

    def test_select_unknown_symbol_falls_back(self):
        form = calc_form.select_instrument(calc_form.new_form(10_000), "NOPE")
        assert form.symbol == "EURUSD"

    def test_direction_flip_keeps_distances(self):
        form = calc_form.new_form(10_000, "EURUSD")
        buy = calc_form.set_direction(form, Direction.BUY)
        sell = calc_form.set_direction(buy, Direction.SELL)
        buy_again = calc_form.set_direction(sell, Direction.BUY)
        assert buy_again.levels == buy.levels
        assert sell.levels.stop_loss_distance == buy.levels.stop_loss_distance
        assert buy.levels.stop_loss_price == pytest.approx(1.0830)

    def test_entry_edit_moves_prices(self):
        form = calc_form.set_direction(calc_form.new_form(10_000, "EURUSD"), "BUY")
        form = calc_form.set_entry_price(form, 1.1000)
        assert form.levels.stop_loss_price == pytest.approx(1.0980)
        assert form.levels.take_profit_price == pytest.approx(1.1040)
        assert form.levels.stop_loss_distance == 20

    def test_stop_price_edit_updates_distance_only(self):
        form = calc_form.set_direction(calc_form.new_form(10_000, "EURUSD"), "BUY")
        form = calc_form.set_stop_loss_price(form, 1.0820)
        assert form.levels.stop_loss_distance == pytest.approx(30.0)
        assert form.levels.stop_loss_price == 1.0820
        assert form.levels.take_profit_distance == 40

    def test_take_profit_distance_edit(self):
        form = calc_form.new_form(10_000)
        form = calc_form.set_take_profit_distance(form, 80)
        assert form.levels.take_profit_price == pytest.approx(38920)

    def test_take_profit_price_edit(self):
        form = calc_form.new_form(10_000)
        form = calc_form.set_take_profit_price(form, 38850)
        assert form.levels.take_profit_distance == pytest.approx(150.0)

    def test_stop_distance_edit(self):
        form = calc_form.new_form(10_000)
        form = calc_form.set_stop_loss_distance(form, 75)
        assert form.levels.stop_loss_price == pytest.approx(39075)

    def test_risk_amount_edit_switches_mode_and_percent(self):
        form = calc_form.set_risk_amount(calc_form.new_form(10_000), "25")
        assert form.mode is RiskMode.RISK
        assert form.risk_percent == "0.25"

    def test_risk_percent_edit_updates_amount(self):
        form = calc_form.set_risk_percent(calc_form.new_form(10_000), "1")
        assert form.mode is RiskMode.RISK
        assert form.risk_amount == "100.00"

    def test_risk_amount_halfway_percent_rounds_up(self):
        form = calc_form.set_risk_amount(calc_form.new_form(10_000), "12.5")
        assert form.risk_percent == "0.13"

    def test_risk_percent_halfway_amount_rounds_up(self):
        # 50 % of 4.25 = 2.125 exactly
        form = calc_form.set_risk_percent(calc_form.new_form(4.25), "50")
        assert form.risk_amount == "2.13"

    def test_unparsable_risk_keeps_percent(self):
        form = calc_form.set_risk_amount(calc_form.new_form(10_000), "abc")
        assert form.risk_amount == "abc"
        assert form.risk_percent == "0.1"

    def test_zero_balance_keeps_percent(self):
        form = calc_form.set_risk_amount(calc_form.new_form(0), "25")
        assert form.risk_percent == "0.1"

    def test_lot_edit_switches_to_lots_mode(self):
        form = calc_form.set_risk_amount(calc_form.new_form(10_000), "25")
        form = calc_form.set_lot_size(form, "0.5")
        assert form.mode is RiskMode.LOTS
        assert calc_form.calculate(form).lots == pytest.approx(0.5)

    def test_contract_size_validation(self):
        with pytest.raises(ValueError, match="contract_size"):
            calc_form.set_contract_size(calc_form.new_form(10_000), 50)

    def test_contract_size_changes_nikkei_risk(self):
        form = calc_form.new_form(10_000)
        standard = calc_form.set_contract_size(form, 1000)
        assert calc_form.calculate(standard).risk_usd == pytest.approx(
            calc_form.calculate(form).risk_usd * 10
        )

    def test_reference_rate_passthrough(self):
        form = calc_form.set_lot_size(calc_form.new_form(10_000), 1)
        result = calc_form.calculate(form, usd_jpy_rate=100.0)
        # 1 lot × 50 pts × 100 / 100
        assert result.risk_usd == pytest.approx(50.0)
