"""
Builds the static HTML page for a manifest using BeautifulSoup, so track names,
titles and URLs are escaped by the tree serializer rather than by hand.
"""

import logging
from pathlib import Path

from bs4 import BeautifulSoup, Doctype

from trackpage.exceptions import PageWriteError
from trackpage.models.manifest import Manifest
from trackpage.utils.urls import resolve

log = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "index.html"
BODY_CLASS = "dark"


def render(manifest: Manifest) -> str:
    """
    Renders the manifest as an HTML document.

    The body holds one block per track, in manifest order: an <h3> with the
    track name followed by an <audio> player whose source is the track URL.
    """
    soup = BeautifulSoup("", "html.parser")
    soup.append(Doctype("html"))

    html = soup.new_tag("html")
    soup.append(html)

    head = soup.new_tag("head")
    head.append(soup.new_tag("meta", attrs={"charset": "utf-8"}))
    title = soup.new_tag("title")
    title.string = manifest.title
    head.append(title)
    html.append(head)

    body = soup.new_tag("body", attrs={"class": BODY_CLASS})
    for song in manifest.songs:
        block = soup.new_tag("div")

        heading = soup.new_tag("h3")
        heading.string = song.name
        block.append(heading)

        audio = soup.new_tag("audio", attrs={"class": "track", "controls": "controls"})
        audio.append(
            soup.new_tag("source", attrs={"src": resolve(manifest.prefix, song.path)})
        )
        block.append(audio)

        body.append(block)
    html.append(body)

    return str(soup) + "\n"


def write_page(manifest: Manifest, output: Path) -> None:
    """
    Renders the manifest and writes the page to `output`.

    Raises:
        PageWriteError: If the file cannot be written.
    """
    output = Path(output)
    document = render(manifest)
    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(document)
    except OSError as e:
        raise PageWriteError(f"Failed to write page '{output}': {e}") from e
    log.debug(f"Wrote page '{output}' with {len(manifest.songs)} track(s).")
