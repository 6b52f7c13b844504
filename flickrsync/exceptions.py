"""
Exceptions for fatal, pre-flight conditions. Per-item failures during a
sync are reported as ApiResult values instead.
"""


class FlickrSyncError(Exception):
    """Base exception for flickrsync."""

    pass


class ConfigError(FlickrSyncError):
    pass


class PreflightError(FlickrSyncError):
    pass
