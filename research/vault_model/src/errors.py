"""Custom errors for the vault engine"""
from enum import Enum


class ErrorKind(Enum):
    """Reason an operation was rejected"""
    INVALID_AMOUNT = "invalid_amount"
    INVALID_BENEFICIARY = "invalid_beneficiary"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    BELOW_MINIMUM_INSTALMENT = "below_minimum_instalment"
    NO_OUTSTANDING_DEBT = "no_outstanding_debt"
    AMOUNT_TOO_LOW = "amount_too_low"
    RATIO_NOT_BELOW_THRESHOLD = "ratio_not_below_threshold"
    INSTALMENT_PERIOD_NOT_EXCEEDED = "instalment_period_not_exceeded"
    UNAUTHORIZED = "unauthorized"
    INVALID_PRICE = "invalid_price"
    ARITHMETIC_OVERFLOW = "arithmetic_overflow"


class ProtocolError(Exception):
    """Base error class for protocol errors"""
    kind: ErrorKind

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)


class InvalidAmountError(ProtocolError):
    """Amount is zero, negative or outside the accepted range"""
    kind = ErrorKind.INVALID_AMOUNT


class InvalidBeneficiaryError(ProtocolError):
    """Beneficiary account is missing or the zero address"""
    kind = ErrorKind.INVALID_BENEFICIARY


class InsufficientBalanceError(ProtocolError):
    """Payer does not hold enough tokens or collateral"""
    kind = ErrorKind.INSUFFICIENT_BALANCE


class BelowMinimumInstalmentError(ProtocolError):
    """Repayment is lower than both the minimum instalment and the debt"""
    kind = ErrorKind.BELOW_MINIMUM_INSTALMENT


class NoOutstandingDebtError(ProtocolError):
    """Vault holds neither debt nor collateral"""
    kind = ErrorKind.NO_OUTSTANDING_DEBT


class AmountTooLowError(ProtocolError):
    """Liquidation amount does not cover the whole debt"""
    kind = ErrorKind.AMOUNT_TOO_LOW


class RatioNotBelowThresholdError(ProtocolError):
    """Collateralization ratio is not below the required value"""
    kind = ErrorKind.RATIO_NOT_BELOW_THRESHOLD


class InstalmentPeriodNotExceededError(ProtocolError):
    """Max time between instalments not exceeded"""
    kind = ErrorKind.INSTALMENT_PERIOD_NOT_EXCEEDED


class UnauthorizedError(ProtocolError):
    """Caller is not the governance owner"""
    kind = ErrorKind.UNAUTHORIZED


class InvalidPriceError(ProtocolError):
    """Error for invalid price data"""
    kind = ErrorKind.INVALID_PRICE


class MathOverflowError(ProtocolError):
    """Error for arithmetic overflow/underflow or division by zero"""
    kind = ErrorKind.ARITHMETIC_OVERFLOW
