"""Per-repository operations."""

from .status import StatusOperation, NO_BRANCH, ERROR_BRANCH

__all__ = [
    'StatusOperation',
    'NO_BRANCH',
    'ERROR_BRANCH',
]
