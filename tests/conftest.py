import asyncio
import json
import socket
import sys
import threading
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from aiohttp import web


async def _ok(request: web.Request) -> web.Response:
    return web.Response(text="ok")


async def _server_error(request: web.Request) -> web.Response:
    return web.Response(status=500, text="boom")


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(float(request.query.get("d", "0.5")))
    return web.Response(text="slow")


async def _redirect(request: web.Request) -> web.Response:
    raise web.HTTPFound(request.query.get("to", "/ok"))


async def _head_not_allowed(request: web.Request) -> web.Response:
    return web.Response(status=405)


async def _slow_get_only(request: web.Request) -> web.Response:
    await asyncio.sleep(float(request.query.get("d", "0.5")))
    if request.method == "HEAD":
        return web.Response(status=405)
    return web.Response(text="slow")


def _build_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/ok", _ok)
    app.router.add_get("/audio/{name}", _ok)
    app.router.add_get("/error", _server_error)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/redirect", _redirect)
    app.router.add_route("HEAD", "/get-only", _head_not_allowed)
    app.router.add_get("/get-only", _ok, allow_head=False)
    app.router.add_route("HEAD", "/slow-get-only", _slow_get_only)
    app.router.add_get("/slow-get-only", _slow_get_only, allow_head=False)
    return app


@pytest.fixture(scope="session")
def http_server() -> str:
    """Serve a small aiohttp app on a background loop and yield its base URL."""

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    loop = asyncio.new_event_loop()
    runner = web.AppRunner(_build_app())
    started = threading.Event()

    def serve() -> None:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(runner.setup())
        loop.run_until_complete(web.SockSite(runner, sock).start())
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    assert started.wait(10), "test HTTP server did not start"

    yield f"http://127.0.0.1:{port}/"

    loop.call_soon_threadsafe(loop.stop)
    thread.join(10)


@pytest.fixture()
def unused_url() -> str:
    """A URL on a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/gone.mp3"


@pytest.fixture()
def manifest_data() -> dict:
    return {
        "title": "Live at the Lighthouse",
        "prefix": "https://media.example.org/lighthouse/",
        "songs": [
            {"name": "Opening", "path": "01-opening.mp3"},
            {"name": "Blue Room", "path": "02-blue-room.mp3"},
            {"name": "Encore", "path": "03-encore.ogg"},
        ],
    }


@pytest.fixture()
def manifest_file(tmp_path: Path, manifest_data: dict) -> Path:
    path = tmp_path / "tracks.json"
    path.write_text(json.dumps(manifest_data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch):
    """Keep a user's real config.ini out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config-home"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "config-home"))
