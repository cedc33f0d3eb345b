# tests/data/test_pricing_data.py

import json

import pytest

from clusterlens.core.exceptions import PricingDataError
from clusterlens.data.pricing import DEFAULT_PRICING, load_pricing_table


def test_default_table_is_loaded_without_path():
    table = load_pricing_table()

    assert table.instance_prices["m5.large"] == 0.096
    assert table.volume_prices["gp3"] == 0.08
    assert table.load_balancer_prices == DEFAULT_PRICING["lb_pricing"]


def test_table_is_read_only():
    table = load_pricing_table()

    with pytest.raises(Exception):
        table.instance_prices = {}


def test_load_from_json_file(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(
        json.dumps(
            {
                "ec2_pricing": {"m7g.custom": 0.2},
                "ebs_pricing": {"gp3": 0.09},
                "lb_pricing": {"classic": 0.03},
            }
        )
    )

    table = load_pricing_table(path)

    assert table.instance_prices == {"m7g.custom": 0.2}
    assert table.volume_prices == {"gp3": 0.09}
    assert table.load_balancer_prices == {"classic": 0.03}


def test_partial_file_leaves_other_categories_empty(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({"ec2_pricing": {"t3.micro": 0.01}}))

    table = load_pricing_table(str(path))

    assert table.volume_prices == {}
    assert table.load_balancer_prices == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(PricingDataError, match="Could not read"):
        load_pricing_table(tmp_path / "missing.json")


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text("{not json")

    with pytest.raises(PricingDataError):
        load_pricing_table(path)


def test_invalid_prices_raise(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps({"ec2_pricing": {"m5.large": "cheap"}}))

    with pytest.raises(PricingDataError, match="not a valid price table"):
        load_pricing_table(path)
