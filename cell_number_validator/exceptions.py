"""
Exceptions for the cell-number-validator application.
"""


class CellValidatorError(Exception):
    """Base exception for all cell number validator errors."""
    pass


class RemoteServiceError(CellValidatorError):
    """Error when the line type lookup cannot complete."""
    pass


class ConfigurationError(CellValidatorError):
    """Error in configuration."""
    pass
