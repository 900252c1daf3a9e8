"""Approved collateral assets"""
from dataclasses import dataclass, field
from typing import List, Tuple

from ..constants import NULL_ADDRESS
from ..errors import AssetNotFoundError


@dataclass(frozen=True)
class Asset:
    """An approved collateral asset"""
    symbol: str
    address: str  # NATIVE_ASSET for the chain-native asset
    decimals: int = 18

    @property
    def unit(self) -> int:
        return 10 ** self.decimals


NULL_ASSET = Asset(symbol="", address=NULL_ADDRESS, decimals=0)


@dataclass
class TokenRegistry:
    """Allow-list of assets a vault may count as collateral"""
    assets: List[Asset] = field(default_factory=list)

    def add_asset(self, asset: Asset) -> None:
        for existing in self.assets:
            if existing.symbol == asset.symbol or existing.address == asset.address:
                raise ValueError(f"Asset {asset.symbol} already registered")
        self.assets.append(asset)

    def remove_asset(self, symbol: str) -> None:
        self.assets.remove(self.get_asset(symbol))

    def list_approved_assets(self) -> Tuple[Asset, ...]:
        return tuple(self.assets)

    def get_asset(self, symbol: str) -> Asset:
        for asset in self.assets:
            if asset.symbol == symbol:
                return asset
        raise AssetNotFoundError(f"Asset {symbol} is not approved")

    def get_asset_if_tracked(self, address: str) -> Asset:
        """Asset registered under address, or NULL_ASSET"""
        for asset in self.assets:
            if asset.address == address:
                return asset
        return NULL_ASSET
