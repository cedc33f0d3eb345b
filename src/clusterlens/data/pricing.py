# src/clusterlens/data/pricing.py

"""
Reference price table used by the cost estimate.

Prices are AWS us-east-1 on-demand list prices in USD: EC2 instances and
load balancers per hour, EBS volumes per GB-month. A JSON document with the
same three keys (`ec2_pricing`, `ebs_pricing`, `lb_pricing`) can replace the
bundled table through PRICING_FILE.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..core.exceptions import PricingDataError
from ..models.cost import PricingTable

logger = logging.getLogger(__name__)

DEFAULT_PRICING = {
    "ec2_pricing": {
        "t3.micro": 0.0104,
        "t3.small": 0.0208,
        "t3.medium": 0.0416,
        "t3.large": 0.0832,
        "t3.xlarge": 0.1664,
        "t3.2xlarge": 0.3328,
        "t3a.medium": 0.0376,
        "t3a.large": 0.0752,
        "t3a.xlarge": 0.1504,
        "m5.large": 0.096,
        "m5.xlarge": 0.192,
        "m5.2xlarge": 0.384,
        "m5.4xlarge": 0.768,
        "m6i.large": 0.096,
        "m6i.xlarge": 0.192,
        "m6i.2xlarge": 0.384,
        "m6g.large": 0.077,
        "m6g.xlarge": 0.154,
        "m7g.large": 0.0816,
        "m7g.xlarge": 0.1632,
        "c5.large": 0.085,
        "c5.xlarge": 0.17,
        "c5.2xlarge": 0.34,
        "c6i.large": 0.085,
        "c6i.xlarge": 0.17,
        "c6g.large": 0.068,
        "c6g.xlarge": 0.136,
        "r5.large": 0.126,
        "r5.xlarge": 0.252,
        "r5.2xlarge": 0.504,
        "r6i.large": 0.126,
        "r6i.xlarge": 0.252,
        "r6g.large": 0.1008,
        "r6g.xlarge": 0.2016,
    },
    "ebs_pricing": {
        "gp2": 0.10,
        "gp3": 0.08,
        "io1": 0.125,
        "io2": 0.125,
        "st1": 0.045,
        "sc1": 0.015,
        "standard": 0.05,
    },
    "lb_pricing": {
        "classic": 0.025,
        "network": 0.0225,
        "application": 0.0225,
    },
}


def load_pricing_table(path: Optional[Union[str, Path]] = None) -> PricingTable:
    """
    Loads a PricingTable from a JSON file, or the bundled table when no path is given.

    Raises:
        PricingDataError: If the file cannot be read or does not describe a price table.
    """
    if path is None:
        return PricingTable.model_validate(DEFAULT_PRICING)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PricingDataError(f"Could not read pricing file '{path}': {e}") from e

    try:
        table = PricingTable.model_validate(data)
    except ValidationError as e:
        raise PricingDataError(f"Pricing file '{path}' is not a valid price table: {e}") from e

    logger.info(
        "Loaded pricing from %s: %d instance, %d volume, %d load balancer price(s).",
        path,
        len(table.instance_prices),
        len(table.volume_prices),
        len(table.load_balancer_prices),
    )
    return table
