"""Custom exceptions for cdn-asset-finder."""


class CdnFinderError(Exception):
    """Base exception for cdn-asset-finder errors."""
    pass


class ConfigurationError(CdnFinderError):
    """Error in configuration (missing token, bad settings)."""
    pass


class NotAFileError(CdnFinderError):
    """Requested repository path is not a regular file."""
    pass
