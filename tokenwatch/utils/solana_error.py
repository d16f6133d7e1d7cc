"""
Custom error types for transaction extraction.
"""

class SolanaError(Exception):
    """Base class for Solana errors."""
    pass

class TransactionError(SolanaError):
    """Base class for transaction errors."""
    pass

class MissingTransactionDataError(TransactionError):
    """Raised when transaction data is missing."""
    pass

class InvalidInstructionError(TransactionError):
    """Raised when instruction data is invalid."""
    pass

class MalformedInstructionError(InvalidInstructionError):
    """Raised when a known instruction has too few accounts or data bytes."""
    pass

class InvalidProgramIdError(TransactionError):
    """Raised when program ID is invalid or not found."""
    pass

class ValidationError(SolanaError):
    """Raised when data validation fails."""
    pass

# Public exports
__all__ = [
    'SolanaError',
    'TransactionError',
    'MissingTransactionDataError',
    'InvalidInstructionError',
    'MalformedInstructionError',
    'InvalidProgramIdError',
    'ValidationError'
]
