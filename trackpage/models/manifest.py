"""
Pydantic models for the track manifest.
"""

from pydantic import BaseModel, ConfigDict


class Track(BaseModel):
    """A single audio item: a display name and a path fragment appended to the prefix."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str


class Manifest(BaseModel):
    """
    The description of a track listing.

    `songs` is presentation order for the rendered page and must never be
    reordered. `prefix` is prepended verbatim to every track path.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str
    prefix: str
    songs: list[Track]

    def with_track(self, track: Track) -> "Manifest":
        """Returns a copy of the manifest with `track` appended to the song list."""
        return self.model_copy(update={"songs": [*self.songs, track]})
