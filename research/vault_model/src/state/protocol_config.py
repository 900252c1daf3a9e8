"""Protocol configuration and the registry authority that owns vaults"""
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, Optional

from ..constants import (
    DEFAULT_BURN_FEE,
    DEFAULT_COLLATERALIZATION_THRESHOLD,
    DEFAULT_EXCHANGE_VENUE,
    DEFAULT_MINT_FEE,
    DEFAULT_SWAP_FEE,
    DEFAULT_TREASURY,
    DEFAULT_WRAPPED_NATIVE,
    NATIVE_ASSET,
    ONE_HUNDRED_PERCENT,
)
from ..instructions.liquidate import liquidate
from .vault import Vault

if TYPE_CHECKING:
    from ..oracle import PriceOracle
    from ..stablecoin import Stablecoin
    from ..venue import ExchangeVenue
    from .collateral import TokenRegistry
    from .ledger import Ledger

LOG = logging.getLogger("vault_model.registry")


@dataclass(frozen=True)
class ProtocolConfig:
    """Fee rates, threshold and addresses set by the registry authority"""
    mint_fee: int = DEFAULT_MINT_FEE
    burn_fee: int = DEFAULT_BURN_FEE
    swap_fee: int = DEFAULT_SWAP_FEE
    collateralization_threshold: int = DEFAULT_COLLATERALIZATION_THRESHOLD
    treasury: str = DEFAULT_TREASURY
    exchange_venue: str = DEFAULT_EXCHANGE_VENUE
    wrapped_native: str = DEFAULT_WRAPPED_NATIVE

    def __post_init__(self) -> None:
        for name in ("mint_fee", "burn_fee", "swap_fee"):
            rate = getattr(self, name)
            if not 0 <= rate <= ONE_HUNDRED_PERCENT:
                raise ValueError(f"{name} must be within [0, {ONE_HUNDRED_PERCENT}], got {rate}")
        if self.collateralization_threshold <= 0:
            raise ValueError("collateralization_threshold must be positive")


class VaultRegistry:
    """Creates vaults and holds the live configuration they read on every call

    The registry is the only identity allowed to change a vault's owner or
    to liquidate it. Vaults never cache anything read from here.
    """

    def __init__(
        self,
        ledger: "Ledger",
        token_registry: "TokenRegistry",
        oracle: "PriceOracle",
        stablecoin: "Stablecoin",
        config: Optional[ProtocolConfig] = None,
        address: str = "vault_registry",
    ):
        self.ledger = ledger
        self.token_registry = token_registry
        self.oracle = oracle
        self.stablecoin = stablecoin
        self.config = config or ProtocolConfig()
        self.address = address
        self.venues: Dict[str, "ExchangeVenue"] = {}
        self._vault_count = 0

    # --- live configuration ---------------------------------------------

    @property
    def mint_fee(self) -> int:
        return self.config.mint_fee

    @property
    def burn_fee(self) -> int:
        return self.config.burn_fee

    @property
    def swap_fee(self) -> int:
        return self.config.swap_fee

    @property
    def collateralization_threshold(self) -> int:
        return self.config.collateralization_threshold

    @property
    def treasury(self) -> str:
        return self.config.treasury

    @property
    def wrapped_native(self) -> str:
        return self.config.wrapped_native

    @property
    def exchange_venue_address(self) -> str:
        return self.config.exchange_venue

    def exchange_venue(self) -> "ExchangeVenue":
        return self.venues[self.exchange_venue_address]

    def register_venue(self, venue: "ExchangeVenue") -> None:
        self.venues[venue.address] = venue

    def update_config(self, **changes) -> ProtocolConfig:
        """Replace configuration values; takes effect on the next vault call"""
        self.config = replace(self.config, **changes)
        LOG.info("[registry] config updated %s", changes)
        return self.config

    # --- vault lifecycle --------------------------------------------------

    def create_vault(self, owner: str, address: Optional[str] = None) -> Vault:
        self._vault_count += 1
        vault = Vault(
            address=address or f"vault_{self._vault_count}",
            owner=owner,
            registry=self,
            native_asset_tag=NATIVE_ASSET,
        )
        self.stablecoin.add_minter(vault.address)
        LOG.info("[registry] created vault=%s owner=%s", vault.address, owner)
        return vault

    def transfer_vault_ownership(self, vault: Vault, new_owner: str) -> None:
        vault.set_owner(self.address, new_owner)

    def liquidate(self, vault: Vault):
        return liquidate(vault, self.address)
