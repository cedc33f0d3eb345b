# tests/utils/test_k8s_utils.py

from decimal import Decimal

import pytest

from clusterlens.utils.k8s_utils import bytes_to_gib, parse_cpu_cores, parse_memory_bytes, parse_quantity


@pytest.mark.parametrize(
    "quantity, cores",
    [
        ("1", Decimal("1")),
        ("250m", Decimal("0.25")),
        ("1500m", Decimal("1.5")),
        ("0.5", Decimal("0.5")),
        ("2", Decimal("2")),
        ("123456789n", Decimal("0.123")),
        ("1999u", Decimal("0.001")),
        (2, Decimal("2")),
        (None, Decimal("0")),
        ("", Decimal("0")),
        ("garbage", Decimal("0")),
    ],
)
def test_parse_cpu_cores(quantity, cores):
    assert parse_cpu_cores(quantity) == cores


@pytest.mark.parametrize(
    "quantity, value",
    [
        ("128Mi", 128 * 1024**2),
        ("1Gi", 1024**3),
        ("1048576Ki", 1024**3),
        ("1G", 1000**3),
        ("500M", 500 * 1000**2),
        ("1024", 1024),
        ("1.5Gi", int(1.5 * 1024**3)),
        (None, 0),
        ("lots", 0),
    ],
)
def test_parse_memory_bytes(quantity, value):
    assert parse_memory_bytes(quantity) == value


def test_parse_quantity_handles_numbers():
    assert parse_quantity(Decimal("0.5")) == Decimal("0.5")
    assert parse_quantity(3) == Decimal(3)
    assert parse_quantity(" 2Ti ") == Decimal(1024) ** 4 * 2


def test_bytes_to_gib():
    assert bytes_to_gib(2 * 1024**3) == 2.0
    assert bytes_to_gib(0) == 0.0
    assert bytes_to_gib(None) == 0.0
