# archive_scout/__init__.py
"""
ArchiveScout package initializer.
Defines package version; the CLI lives in :mod:`archive_scout.cli`.
"""
__version__ = "0.1.0"
