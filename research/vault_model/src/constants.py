# Fixed point scales
REFERENCE_DECIMALS = 18  # reference currency (USD) carries 18 decimals
REFERENCE_SCALE = 10 ** REFERENCE_DECIMALS
STABLE_DECIMALS = 18  # pegged unit decimals
PRICE_SCALE = 10 ** 18  # price of one whole token in reference units
ONE_HUNDRED_PERCENT = 100_000  # 100% = 100000, 0.5% = 500
UINT256_MAX = 2 ** 256 - 1

# Fee constants
DEFAULT_MINT_FEE = 500           # 0.5%
DEFAULT_BURN_FEE = 500           # 0.5%
DEFAULT_SWAP_FEE = 300           # 0.3%

# Collateral constants
DEFAULT_COLLATERALIZATION_THRESHOLD = 150_000  # 150%

# Addresses
NATIVE_ASSET = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"  # tag for the chain-native asset
NULL_ADDRESS = "0x0000000000000000000000000000000000000000"
DEFAULT_TREASURY = "treasury"
DEFAULT_EXCHANGE_VENUE = "venue"
DEFAULT_WRAPPED_NATIVE = "WNATIVE"
STABLECOIN_ADDRESS = "STABLE"

# Swap constants
SWAP_DEADLINE_SECONDS = 15 * 60

# Status tags
VAULT_VERSION = "1.0.0"
VAULT_TYPE = "MULTI_COLLATERAL"
