"""
Storage Layer.

This package handles all data persistence: the track manifest on disk and the
optional configuration file for the reachability checker.
"""

from .config_manager import ConfigManager
from .manifest_store import ManifestStore

__all__ = ["ConfigManager", "ManifestStore"]
