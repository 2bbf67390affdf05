"""
Rendering Layer.

Turns a manifest into the static HTML page that embeds an audio player per track.
"""

from .page import render, write_page

__all__ = ["render", "write_page"]
