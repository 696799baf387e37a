from contextlib import asynccontextmanager

import pytest

import gphotoaudit.__main__ as cli
from conftest import FakeLibrary
from gphotoaudit.api import PhotosAPIError


def feed_input(monkeypatch, answers):
    """Answer prompts in order; record every prompt shown."""
    pending = list(answers)
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        if not pending:
            raise AssertionError(f"unexpected prompt: {prompt!r}")
        return pending.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


def use_client(monkeypatch, client):
    @asynccontextmanager
    async def fake_open_client():
        yield client

    monkeypatch.setattr(cli, "open_client", fake_open_client)


def leftover_library():
    return FakeLibrary(
        media_items=["A", "B"],
        albums=[{"id": "1", "title": "Trips", "items": ["A"]}],
    )


async def test_quit(monkeypatch):
    feed_input(monkeypatch, ["q"])
    assert await cli.audit() is False


async def test_unknown_command(monkeypatch, capsys):
    feed_input(monkeypatch, ["9"])
    assert await cli.audit() is True
    assert "[!] Unknown command: '9'" in capsys.readouterr().out


async def test_api_error_is_reported(monkeypatch, capsys):
    @asynccontextmanager
    async def failing_open_client():
        raise PhotosAPIError("No access token")
        yield  # pragma: no cover

    monkeypatch.setattr(cli, "open_client", failing_open_client)
    feed_input(monkeypatch, ["1"])

    assert await cli.audit() is True
    assert "[!] findOutOfAlbumPhotos failed: No access token" in capsys.readouterr().out


async def test_album_without_id_is_reported(monkeypatch, capsys):
    class NoIdAlbums:
        async def request(self, method, path, body=None):
            if path.startswith("/albums"):
                return {"albums": [{"title": "Trips"}]}
            return {"mediaItems": [{"id": "A", "productUrl": "u"}]}

    use_client(monkeypatch, NoIdAlbums())
    feed_input(monkeypatch, ["1"])

    assert await cli.audit() is True
    assert "Album without id" in capsys.readouterr().out


async def test_unexpected_handler_error_is_reported(monkeypatch, capsys):
    class Exploding:
        async def request(self, method, path, body=None):
            raise KeyError("boom")

    use_client(monkeypatch, Exploding())
    feed_input(monkeypatch, ["1"])

    assert await cli.audit() is True
    assert "[!] findOutOfAlbumPhotos failed: KeyError" in capsys.readouterr().out


async def test_no_results_skips_save_prompt(monkeypatch, capsys):
    use_client(
        monkeypatch,
        FakeLibrary(media_items=["A"], albums=[{"id": "1", "title": "T", "items": ["A"]}]),
    )
    prompts = feed_input(monkeypatch, ["1", "n"])

    assert await cli.audit() is False
    assert not any("Save" in p for p in prompts)
    assert "No out-of-album photos found" in capsys.readouterr().out


async def test_save_uses_default_output_name(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)
    use_client(monkeypatch, leftover_library())
    feed_input(monkeypatch, ["1", "y", "", "y"])

    assert await cli.audit() is True
    saved = tmp_path / cli.OUTPUT_NAME
    assert saved.exists()
    assert "https://photos.example/B" in saved.read_text(encoding="utf-8")
    assert f"[^] Saved: {cli.OUTPUT_NAME}" in capsys.readouterr().out


async def test_save_failure_is_reported(monkeypatch, capsys):
    def broken_save(result, path):
        raise OSError("disk full")

    monkeypatch.setattr(cli, "save_report", broken_save)
    use_client(monkeypatch, leftover_library())
    feed_input(monkeypatch, ["1", "y", "report", "n"])

    assert await cli.audit() is False
    assert "[!] Failed to save report: disk full" in capsys.readouterr().out


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 3),
        ("", 3),
        ("abc", 3),
        ("2.5", 3),
        ("5", 5),
    ],
)
def test_env_int_falls_back_on_invalid_values(monkeypatch, raw, expected):
    from gphotoaudit import utils

    if raw is None:
        monkeypatch.delenv("GPHOTOS_TEST_INT", raising=False)
    else:
        monkeypatch.setenv("GPHOTOS_TEST_INT", raw)
    assert utils._env_int("GPHOTOS_TEST_INT", 3) == expected
