"""
trackpage: build a static audio page from a track manifest and verify that
every track it links to is reachable.
"""

__version__ = "0.1.0"
