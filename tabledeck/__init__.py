"""Tabular data -> paginated slide-deck table export."""

__version__ = "0.1.0"
