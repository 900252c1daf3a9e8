"""Valuation service converting asset amounts to and from the reference currency"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from .constants import PRICE_SCALE
from .errors import InvalidPriceError
from .fixed_point import mul_div, mul_div_up
from .state.collateral import Asset

LOG = logging.getLogger("vault_model.oracle")


@dataclass
class PriceOracle:
    """Prices are reference units (PRICE_SCALE) per whole token

    `average_prices` stand in for the time-weighted feed used for collateral
    valuation; `spot_prices` fall back to the average when unset.
    """
    average_prices: Dict[str, int] = field(default_factory=dict)
    spot_prices: Dict[str, int] = field(default_factory=dict)

    def set_price(self, address: str, price: int, spot: Optional[int] = None) -> None:
        if price <= 0:
            raise InvalidPriceError(f"Price for {address} must be positive, got {price}")
        self.average_prices[address] = price
        if spot is not None:
            self.spot_prices[address] = spot
        LOG.debug("[oracle] price set asset=%s avg=%d spot=%s", address, price, spot)

    def price_of(self, address: str, spot: bool = False) -> int:
        price = None
        if spot:
            price = self.spot_prices.get(address)
        if price is None:
            price = self.average_prices.get(address)
        if not price:
            raise InvalidPriceError(f"No price for {address}")
        return price

    def to_reference(self, asset: Asset, amount: int) -> int:
        """Average-price value of amount, rounded down"""
        if amount == 0:
            return 0
        # value = amount * price / 10^decimals
        return mul_div(amount, self.price_of(asset.address), asset.unit)

    def to_reference_spot(self, asset: Asset, amount: int) -> int:
        if amount == 0:
            return 0
        return mul_div(amount, self.price_of(asset.address, spot=True), asset.unit)

    def from_reference(self, asset: Asset, value: int) -> int:
        """Asset amount worth at least value at the average price, rounded up"""
        if value == 0:
            return 0
        # amount = value * 10^decimals / price
        return mul_div_up(value, asset.unit, self.price_of(asset.address))


def usd(amount) -> int:
    """Whole reference units to fixed point, handy for prices"""
    return int(Decimal(str(amount)) * PRICE_SCALE)
