"""
Builds track URLs from the manifest prefix and each track path.
"""

from trackpage.models.manifest import Manifest


def resolve(prefix: str, path: str) -> str:
    """
    Joins a prefix and a track path into the track's URL.

    This is plain concatenation: no escaping and no slash handling. A prefix
    that should act as a directory must end with '/'.
    """
    return prefix + path


def resolve_tracks(manifest: Manifest) -> list[tuple[str, str]]:
    """Returns (name, url) pairs for every track, in manifest order."""
    return [(song.name, resolve(manifest.prefix, song.path)) for song in manifest.songs]
