# tests/core/test_pricing.py
"""
Tests for the monthly cost projection.
"""

import logging

import pytest

from clusterlens.core.pricing import HOURS_PER_MONTH, estimate_cost
from clusterlens.data.pricing import load_pricing_table
from clusterlens.models.cost import CostInventory, PricingTable


@pytest.fixture
def pricing():
    return load_pricing_table()


def test_priced_and_unpriced_instances(pricing, caplog):
    """Two m5.large are priced; the unknown type is listed, warned about once and left out of the total."""
    inventory = CostInventory(region="us-east-1", instance_counts={"m5.large": 2, "m7g.custom": 1})

    with caplog.at_level(logging.WARNING):
        summary = estimate_cost(inventory, pricing)

    assert summary.total_monthly_cost == pytest.approx(2 * 0.096 * 730)
    by_type = {item.instance_type: item for item in summary.instances}
    assert by_type["m5.large"].monthly_cost == pytest.approx(140.16)
    assert by_type["m5.large"].hourly_price == 0.096
    assert by_type["m7g.custom"].monthly_cost is None
    assert by_type["m7g.custom"].hourly_price is None
    assert [(w.category, w.resource_type) for w in summary.warnings] == [("instance", "m7g.custom")]
    assert "m7g.custom" in caplog.text


def test_volume_and_load_balancer_costs(pricing):
    inventory = CostInventory(
        volume_sizes_gb={"gp3": 100, "io2": 50},
        load_balancer_counts={"network": 1, "classic": 2},
    )

    summary = estimate_cost(inventory, pricing)

    volumes = {v.volume_type: v.monthly_cost for v in summary.volumes}
    lbs = {lb.lb_type: lb.monthly_cost for lb in summary.load_balancers}
    assert volumes["gp3"] == pytest.approx(8.0)
    assert volumes["io2"] == pytest.approx(6.25)
    assert lbs["network"] == pytest.approx(0.0225 * HOURS_PER_MONTH)
    assert lbs["classic"] == pytest.approx(2 * 0.025 * HOURS_PER_MONTH)
    assert summary.total_monthly_cost == pytest.approx(8.0 + 6.25 + 0.0225 * 730 + 2 * 0.025 * 730)
    assert summary.warnings == []


def test_one_warning_per_unpriced_type():
    pricing = PricingTable(instance_prices={"m5.large": 0.1})
    inventory = CostInventory(
        instance_counts={"x1.weird": 3, "m5.large": 1},
        volume_sizes_gb={"magnetic": 10},
        load_balancer_counts={"gateway": 2},
    )

    summary = estimate_cost(inventory, pricing)

    assert sorted((w.category, w.resource_type) for w in summary.warnings) == [
        ("instance", "x1.weird"),
        ("load_balancer", "gateway"),
        ("volume", "magnetic"),
    ]
    assert summary.total_monthly_cost == pytest.approx(0.1 * 730)


def test_empty_inventory_costs_nothing(pricing):
    summary = estimate_cost(CostInventory(), pricing)

    assert summary.total_monthly_cost == 0.0
    assert summary.instances == []
    assert summary.volumes == []
    assert summary.load_balancers == []
    assert summary.warnings == []


def test_line_items_are_sorted_by_type(pricing):
    summary = estimate_cost(CostInventory(instance_counts={"t3.micro": 1, "c5.large": 1, "m5.large": 1}), pricing)

    assert [i.instance_type for i in summary.instances] == ["c5.large", "m5.large", "t3.micro"]


def test_region_is_carried_through(pricing):
    summary = estimate_cost(CostInventory(region="ap-south-1"), pricing)

    assert summary.region == "ap-south-1"
