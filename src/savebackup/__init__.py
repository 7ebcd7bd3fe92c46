"""Timestamped backups of documents as they are saved."""

__version__ = "1.5.0"
