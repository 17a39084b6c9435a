"""Tests for logo fetching and the load barrier."""

import threading
from io import BytesIO

import requests
from PIL import Image

import logos
from logos import LogoLoad, fetch_logo, load_logos, placeholder_logo


def _png_bytes(mode="RGBA", size=(40, 20), color=(10, 20, 30, 255)) -> bytes:
    buf = BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


def test_fetch_logo_decodes_transparent_png(monkeypatch):
    monkeypatch.setattr(logos, "request_bytes", lambda url, timeout: _png_bytes())

    result = fetch_logo("https://example.test/a.png")

    assert result.ok
    assert result.image.mode == "RGBA"
    assert result.image.size == (40, 20)


def test_fetch_logo_keeps_opaque_images_rgb(monkeypatch):
    data = _png_bytes(mode="RGB", color=(1, 2, 3))
    monkeypatch.setattr(logos, "request_bytes", lambda url, timeout: data)

    result = fetch_logo("https://example.test/a.png")

    assert result.image.mode == "RGB"


def test_fetch_logo_reports_download_failure(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(logos, "request_bytes", boom)

    result = fetch_logo("https://example.test/a.png")

    assert not result.ok
    assert "download failed" in result.error


def test_fetch_logo_reports_decode_failure(monkeypatch):
    monkeypatch.setattr(logos, "request_bytes", lambda url, timeout: b"<html>nope</html>")

    result = fetch_logo("https://example.test/a.png")

    assert not result.ok
    assert "decode failed" in result.error


def test_fetch_logo_without_reference_skips_network(monkeypatch):
    def unexpected(url, timeout):
        raise AssertionError("should not fetch")

    monkeypatch.setattr(logos, "request_bytes", unexpected)

    result = fetch_logo("")

    assert result.error == "missing logo reference"


def test_load_logos_turns_loader_exceptions_into_failures(caplog):
    def fetcher(ref, timeout):
        if ref == "bad":
            raise RuntimeError("kaboom")
        return LogoLoad(reference=ref, image=Image.new("RGB", (4, 4)))

    results = load_logos(["good", "bad"], fetcher=fetcher)

    assert [r.ok for r in results] == [True, False]
    assert "kaboom" in results[1].error
    assert "Logo load failed 'bad'" in caplog.text


def test_load_logos_times_out_stuck_loads():
    release = threading.Event()

    def fetcher(ref, timeout):
        if ref == "slow":
            release.wait(5)
        return LogoLoad(reference=ref, image=Image.new("RGB", (4, 4)))

    try:
        results = load_logos(["fast", "slow"], timeout=0.05, fetcher=fetcher)
    finally:
        release.set()

    assert results[0].ok
    assert results[1].error == "timed out"


def test_load_logos_handles_any_number_of_references():
    def fetcher(ref, timeout):
        return LogoLoad(reference=ref, image=Image.new("RGB", (4, 4)))

    refs = [f"logo-{i}" for i in range(5)]

    assert [r.reference for r in load_logos(refs, fetcher=fetcher)] == refs
    assert load_logos([], fetcher=fetcher) == []


def test_placeholder_logo_is_transparent_square():
    img = placeholder_logo(400)

    assert img.size == (400, 400)
    assert img.mode == "RGBA"
    assert img.getpixel((200, 200))[3] == 0
