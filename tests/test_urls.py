from trackpage.models.manifest import Manifest, Track
from trackpage.utils.urls import resolve, resolve_tracks


def test_resolve_concatenates_verbatim():
    assert resolve("http://host/", "a.mp3") == "http://host/a.mp3"
    assert resolve("", "a.mp3") == "a.mp3"


def test_resolve_does_not_add_a_separator():
    assert resolve("http://host/music", "a.mp3") == "http://host/musica.mp3"


def test_resolve_with_empty_path_returns_prefix():
    assert resolve("http://host/", "") == "http://host/"


def test_resolve_tracks_keeps_order_and_duplicates():
    manifest = Manifest(
        title="",
        prefix="https://cdn/",
        songs=[
            Track(name="Two", path="2.mp3"),
            Track(name="One", path="1.mp3"),
            Track(name="Two again", path="2.mp3"),
        ],
    )

    assert resolve_tracks(manifest) == [
        ("Two", "https://cdn/2.mp3"),
        ("One", "https://cdn/1.mp3"),
        ("Two again", "https://cdn/2.mp3"),
    ]
