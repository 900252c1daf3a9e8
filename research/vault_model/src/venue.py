"""Single-hop exact-input exchange venue priced off the oracle's spot feed"""
import logging
import time
from typing import Callable

from .constants import NATIVE_ASSET, ONE_HUNDRED_PERCENT
from .errors import AssetNotFoundError, DeadlineExpiredError, SlippageError
from .fixed_point import mul_div
from .oracle import PriceOracle
from .state.collateral import NULL_ASSET, Asset, TokenRegistry
from .state.ledger import Ledger

LOG = logging.getLogger("vault_model.venue")


class ExchangeVenue:
    """Pays out of its own inventory at spot price minus a slippage haircut

    The wrapped native token is priced as the native asset.
    """

    def __init__(
        self,
        ledger: Ledger,
        oracle: PriceOracle,
        token_registry: TokenRegistry,
        wrapped_native: str,
        address: str = "venue",
        slippage: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        self.ledger = ledger
        self.oracle = oracle
        self.token_registry = token_registry
        self.wrapped_native = wrapped_native
        self.address = address
        self.slippage = slippage  # in ONE_HUNDRED_PERCENT units
        self.clock = clock

    def _asset_for(self, address: str) -> Asset:
        lookup = NATIVE_ASSET if address == self.wrapped_native else address
        asset = self.token_registry.get_asset_if_tracked(lookup)
        if asset is NULL_ASSET:
            if address == self.wrapped_native:
                return Asset(symbol=address, address=NATIVE_ASSET)
            raise AssetNotFoundError(f"Venue has no market for {address}")
        return asset

    def quote(self, token_in: str, token_out: str, amount_in: int) -> int:
        value_in = self.oracle.to_reference_spot(self._asset_for(token_in), amount_in)
        value_out = mul_div(value_in, ONE_HUNDRED_PERCENT - self.slippage, ONE_HUNDRED_PERCENT)
        asset_out = self._asset_for(token_out)
        # amount_out = value_out * 10^decimals / spot_price, rounded down
        return mul_div(value_out, asset_out.unit, self.oracle.price_of(asset_out.address, spot=True))

    def exchange(
        self,
        caller: str,
        token_in: str,
        token_out: str,
        amount_in: int,
        minimum_amount_out: int,
        recipient: str,
        deadline: float,
        value: int = 0,
    ) -> int:
        if self.clock() > deadline:
            raise DeadlineExpiredError(f"Exchange deadline {deadline} passed")
        if value:
            if token_in != self.wrapped_native or value != amount_in:
                raise ValueError("Native value must match amount_in of the wrapped native token")
            self.ledger.send_native(caller, self.address, value)
            self.ledger.wrap(self.wrapped_native, self.address, value)
        else:
            self.ledger.transfer_from(token_in, self.address, caller, self.address, amount_in)

        amount_out = self.quote(token_in, token_out, amount_in)
        if amount_out < minimum_amount_out:
            raise SlippageError(
                f"Output {amount_out} {token_out} below minimum {minimum_amount_out}"
            )
        self.ledger.transfer(token_out, self.address, recipient, amount_out)
        LOG.info(
            "[venue] exchanged %d %s -> %d %s for %s",
            amount_in, token_in, amount_out, token_out, recipient,
        )
        return amount_out
