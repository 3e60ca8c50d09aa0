"""Utilities package for repostatus."""

from .git import GitClient, VersionControlClient
from .table import RowTemplate, render_row, render_tally

__all__ = [
    'GitClient',
    'VersionControlClient',
    'RowTemplate',
    'render_row',
    'render_tally',
]
