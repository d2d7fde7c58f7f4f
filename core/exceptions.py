"""
Custom exceptions for better error handling.
"""
from typing import Any, Dict, Optional


class CardImportException(Exception):
    """Base exception for all card statement import errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.
        
        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BatchReadFailure(CardImportException):
    """Raised when reading any file of a batch (or fetching the sample) fails."""
    pass


class ConfigurationError(CardImportException):
    """Raised when configuration is invalid."""
    pass
