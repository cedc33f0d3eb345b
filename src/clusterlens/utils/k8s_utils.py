from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Optional, Union

GIB = 1024**3

# Ordered so two-letter binary suffixes are matched before their one-letter prefixes.
_QUANTITY_SUFFIXES = (
    ("Ki", Decimal(1024)),
    ("Mi", Decimal(1024) ** 2),
    ("Gi", Decimal(1024) ** 3),
    ("Ti", Decimal(1024) ** 4),
    ("Pi", Decimal(1024) ** 5),
    ("Ei", Decimal(1024) ** 6),
    ("n", Decimal("0.000000001")),
    ("u", Decimal("0.000001")),
    ("m", Decimal("0.001")),
    ("k", Decimal(1000)),
    ("M", Decimal(1000) ** 2),
    ("G", Decimal(1000) ** 3),
    ("T", Decimal(1000) ** 4),
    ("P", Decimal(1000) ** 5),
    ("E", Decimal(1000) ** 6),
)

Quantity = Union[str, int, float, Decimal, None]


def parse_quantity(quantity: Quantity) -> Decimal:
    """
    Parse a Kubernetes quantity ("250m", "1Gi", "4") to Decimal.
    Unparseable values yield Decimal(0).
    """
    if quantity is None:
        return Decimal(0)
    if isinstance(quantity, (int, float, Decimal)):
        return Decimal(quantity)

    number = str(quantity).strip()
    multiplier = Decimal(1)
    for suffix, factor in _QUANTITY_SUFFIXES:
        if number.endswith(suffix):
            number = number[: -len(suffix)]
            multiplier = factor
            break

    try:
        return Decimal(number) * multiplier
    except (InvalidOperation, ValueError):
        return Decimal(0)


def parse_cpu_cores(cpu: Quantity) -> Decimal:
    """Converts a K8s CPU quantity to cores, truncated to whole millicores."""
    if not cpu:
        return Decimal(0)
    return parse_quantity(cpu).quantize(Decimal("0.001"), rounding=ROUND_DOWN)


def parse_memory_bytes(memory: Quantity) -> int:
    """Converts a K8s memory or storage quantity to bytes (int)."""
    if not memory:
        return 0
    return int(parse_quantity(memory))


def bytes_to_gib(value: Optional[int]) -> float:
    if not value:
        return 0.0
    return value / GIB
