"""Custom errors for the vault model"""

class ProtocolError(Exception):
    """Base error class for protocol errors"""
    pass

class ArithmeticOverflowError(ProtocolError):
    """Error for arithmetic overflow/underflow"""
    pass

class InvalidPriceError(ProtocolError):
    """Error for missing or zero price data"""
    pass

class UnauthorizedError(ProtocolError):
    """Caller is neither owner nor registry authority where required"""
    pass

class UndercollateralizedError(ProtocolError):
    """Action would push minted amount above max mintable"""
    pass

class VaultLiquidatedError(ProtocolError):
    """Action attempted on a liquidated vault"""
    pass

class InsufficientMintedError(ProtocolError):
    """Burn amount exceeds the vault's minted amount"""
    pass

class NotLiquidatableError(ProtocolError):
    """Liquidation attempted on a vault that is not undercollateralized"""
    pass

class ReentrancyError(ProtocolError):
    """Mutating call made while another one is in progress on the same vault"""
    pass

class AssetNotFoundError(ProtocolError):
    """Asset is not in the approved-asset registry"""
    pass

class TransferRejectedError(ProtocolError):
    """Recipient refused a value transfer"""
    pass

class InsufficientBalanceError(ProtocolError):
    """Sender balance too low for a transfer or burn"""
    pass

class InsufficientAllowanceError(ProtocolError):
    """Spender allowance too low for transfer_from"""
    pass

class SlippageError(ProtocolError):
    """Exchange output fell below the required minimum"""
    pass

class DeadlineExpiredError(ProtocolError):
    """Exchange executed after its deadline"""
    pass
