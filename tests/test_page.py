from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from trackpage.exceptions import PageWriteError, WriteError
from trackpage.models.manifest import Manifest, Track
from trackpage.render.page import render, write_page


@pytest.fixture()
def manifest() -> Manifest:
    return Manifest(
        title="Evening Set",
        prefix="https://cdn.example.com/set/",
        songs=[
            Track(name="Zeta", path="z.mp3"),
            Track(name="Alpha", path="a.mp3"),
            Track(name="Mid", path="m.ogg"),
        ],
    )


def test_render_structure(manifest: Manifest):
    html = render(manifest)
    soup = BeautifulSoup(html, "html.parser")

    assert html.startswith("<!DOCTYPE html>")
    assert soup.title.string == "Evening Set"
    assert soup.body["class"] == ["dark"]
    players = soup.body.find_all("audio")
    assert len(players) == 3
    assert all(p["controls"] == "controls" for p in players)
    assert [p.source["src"] for p in players] == [
        "https://cdn.example.com/set/z.mp3",
        "https://cdn.example.com/set/a.mp3",
        "https://cdn.example.com/set/m.ogg",
    ]
    assert [h.string for h in soup.body.find_all("h3")] == ["Zeta", "Alpha", "Mid"]


def test_render_empty_manifest():
    soup = BeautifulSoup(render(Manifest(title="", prefix="", songs=[])), "html.parser")

    assert soup.find_all("audio") == []
    assert soup.title is not None


def test_render_escapes_names_and_urls():
    manifest = Manifest(
        title="<Rock & Roll>",
        prefix='https://x/?a=1&b="2"',
        songs=[Track(name="<script>alert(1)</script>", path="")],
    )

    html = render(manifest)
    soup = BeautifulSoup(html, "html.parser")

    assert "<script>" not in html
    assert soup.title.string == "<Rock & Roll>"
    assert soup.h3.string == "<script>alert(1)</script>"
    assert soup.source["src"] == 'https://x/?a=1&b="2"'


def test_write_page(tmp_path: Path, manifest: Manifest):
    output = tmp_path / "index.html"

    write_page(manifest, output)

    assert output.read_text(encoding="utf-8") == render(manifest)


def test_write_page_failure(tmp_path: Path, manifest: Manifest):
    with pytest.raises(PageWriteError) as exc_info:
        write_page(manifest, tmp_path / "no-such-dir" / "index.html")

    assert isinstance(exc_info.value, WriteError)
