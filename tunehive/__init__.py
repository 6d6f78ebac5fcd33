"""Tune Hive: an in-memory music catalogue editor."""

__version__ = "1.0.0"
