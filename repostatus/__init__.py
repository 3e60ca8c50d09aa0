"""repostatus: one-line git status summaries for every repository under a directory."""

__version__ = "0.1.0"
