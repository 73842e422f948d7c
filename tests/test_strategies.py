import math
from types import SimpleNamespace

import pytest

from sales_performance.metrics.strategies import calculate_bonus_by_profit, calculate_simple_revenue


def test_simple_revenue_without_discount():
    item = {"sku": "P", "quantity": 2, "discount": 0, "sale_price": 15}

    assert calculate_simple_revenue(item, {"sku": "P", "purchase_price": 10}) == 30


def test_simple_revenue_applies_percent_discount():
    item = {"sku": "P", "quantity": 4, "discount": 25, "sale_price": 50}

    assert calculate_simple_revenue(item, {}) == pytest.approx(150.0)


def test_simple_revenue_ignores_product_card():
    item = {"quantity": 1, "discount": 10, "sale_price": 200}

    assert calculate_simple_revenue(item, {"purchase_price": 1}) == calculate_simple_revenue(item, {})


def test_simple_revenue_null_discount_counts_as_zero():
    item = {"sku": "P", "quantity": 2, "discount": None, "sale_price": 15}

    assert calculate_simple_revenue(item, {}) == 30


def test_simple_revenue_missing_discount_is_nan():
    item = {"sku": "P", "quantity": 2, "sale_price": 15}

    assert math.isnan(calculate_simple_revenue(item, {}))


def test_simple_revenue_reads_numeric_strings():
    item = {"sku": "P", "quantity": "2", "discount": "0", "sale_price": "15"}

    assert calculate_simple_revenue(item, {}) == pytest.approx(30.0)


def test_simple_revenue_non_numeric_price_is_nan():
    item = {"sku": "P", "quantity": 2, "discount": 0, "sale_price": "n/a"}

    assert math.isnan(calculate_simple_revenue(item, {}))


def _bonuses(total, profit=1000):
    seller = SimpleNamespace(profit=profit)
    return [calculate_bonus_by_profit(index, total, seller) for index in range(total)]


def test_bonus_table_for_five_sellers():
    assert _bonuses(5) == pytest.approx([150.0, 100.0, 100.0, 50.0, 0.0])


@pytest.mark.parametrize(
    "total, expected",
    [
        (1, [0.0]),
        (2, [150.0, 0.0]),
        (3, [150.0, 100.0, 0.0]),
        (4, [150.0, 100.0, 100.0, 0.0]),
    ],
)
def test_last_rank_rule_wins_on_collisions(total, expected):
    assert _bonuses(total) == pytest.approx(expected)


def test_bonus_uses_seller_profit():
    assert calculate_bonus_by_profit(0, 10, SimpleNamespace(profit=200)) == pytest.approx(30.0)
    assert calculate_bonus_by_profit(5, 10, SimpleNamespace(profit=200)) == pytest.approx(10.0)
