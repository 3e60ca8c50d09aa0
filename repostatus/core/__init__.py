"""Core package for repostatus."""

from .types import (
    Severity,
    LocalState,
    RemoteState,
    ReportRow,
    compute_severity,
)

from .locator import locate_repositories, display_name
from .logger import setup_logging

__all__ = [
    # Types
    'Severity',
    'LocalState',
    'RemoteState',
    'ReportRow',
    'compute_severity',
    # Scanning
    'locate_repositories',
    'display_name',
    'setup_logging',
]
