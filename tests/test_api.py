"""Tests for Vixyl FastAPI endpoints."""

import base64
import io

from fastapi.testclient import TestClient
from PIL import Image
from structlog.testing import capture_logs

import vixyl.main
from vixyl.main import MAX_UPLOAD_BYTES, app

client = TestClient(app)


def _encode(data: bytes, filename: str = "hello.txt", **form) -> bytes:
    resp = client.post(
        "/encode",
        files={"file": (filename, data, "application/octet-stream")},
        data=form,
    )
    assert resp.status_code == 200, resp.text
    return resp.content


class TestHealthEndpoint:
    def test_health_returns_200(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "vixyl"

    def test_health_includes_version(self):
        resp = client.get("/health")
        assert "version" in resp.json()


class TestFormatsEndpoint:
    def test_lists_gray(self):
        resp = client.get("/formats")
        assert resp.status_code == 200
        assert {"tag": 0, "name": "GRAY"} in resp.json()


class TestEncodeEndpoint:
    def test_encode_returns_png(self):
        resp = client.post(
            "/encode",
            files={"file": ("hello.txt", b"Hello", "text/plain")},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content[:4] == b"\x89PNG"

    def test_encode_with_background(self):
        png_bytes = _encode(b"Hello", background="#112233")
        img = Image.open(io.BytesIO(png_bytes)).convert("RGBA")
        center = img.width // 2
        assert img.getpixel((center, img.height - 2)) == (0x11, 0x22, 0x33, 252)

    def test_encode_invalid_background_returns_422(self):
        resp = client.post(
            "/encode",
            files={"file": ("a.txt", b"abc", "text/plain")},
            data={"background": "#zzzzzz"},
        )
        assert resp.status_code == 422

    def test_encode_unknown_format_returns_422(self):
        resp = client.post(
            "/encode",
            files={"file": ("a.txt", b"abc", "text/plain")},
            data={"format_tag": "5"},
        )
        assert resp.status_code == 422
        assert "Unknown format tag" in resp.json()["detail"]

    def test_encode_wide_file_type_returns_422(self):
        resp = client.post(
            "/encode",
            files={"file": ("a.txt", b"abc", "text/plain")},
            data={"file_type": "テキスト"},
        )
        assert resp.status_code == 422

    def test_encode_too_large_returns_413(self):
        resp = client.post(
            "/encode",
            files={"file": ("big.bin", bytes(MAX_UPLOAD_BYTES + 1), "application/octet-stream")},
        )
        assert resp.status_code == 413

    def test_encode_missing_file_returns_422(self):
        resp = client.post("/encode", data={"file_type": "txt"})
        assert resp.status_code == 422


class TestDecodeEndpoint:
    def test_roundtrip(self):
        png_bytes = _encode(b"Hello, record!", filename="note.txt")
        resp = client.post("/decode", files={"file": ("v.png", png_bytes, "image/png")})
        assert resp.status_code == 200
        data = resp.json()
        assert data["error"] is None
        assert data["file_type"] == "txt"
        assert data["size"] == 14
        assert base64.b64decode(data["data_base64"]) == b"Hello, record!"

    def test_roundtrip_explicit_type(self):
        payload = bytes(range(200))
        png_bytes = _encode(payload, filename="blob", file_type="bin")
        resp = client.post("/decode", files={"file": ("v.png", png_bytes, "image/png")})
        data = resp.json()
        assert data["file_type"] == "bin"
        assert base64.b64decode(data["data_base64"]) == payload

    def test_no_extension_gives_empty_type(self):
        png_bytes = _encode(b"xyz", filename="README")
        resp = client.post("/decode", files={"file": ("v.png", png_bytes, "image/png")})
        assert resp.json()["file_type"] == ""

    def test_decode_non_vixyl_reports_error(self):
        img = Image.new("RGBA", (64, 64), (255, 255, 255, 255))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        resp = client.post("/decode", files={"file": ("x.png", buf.getvalue(), "image/png")})
        assert resp.status_code == 200
        data = resp.json()
        assert data["data_base64"] is None
        assert data["file_type"] is None
        assert "Invalid header" in data["error"]

    def test_decode_garbage_reports_error(self):
        resp = client.post("/decode", files={"file": ("x.png", b"garbage", "image/png")})
        assert resp.status_code == 200
        assert resp.json()["error"] is not None

    def test_decode_rejects_jpeg(self):
        resp = client.post("/decode", files={"file": ("x.jpg", b"\xff\xd8", "image/jpeg")})
        assert resp.status_code == 422

    def test_decode_oversized_dimensions_reports_error(self, monkeypatch):
        # Pillow refuses images far beyond MAX_IMAGE_PIXELS before decoding them
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
        img = Image.new("1", (64, 64))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        resp = client.post("/decode", files={"file": ("big.png", buf.getvalue(), "image/png")})
        assert resp.status_code == 200
        data = resp.json()
        assert data["data_base64"] is None
        assert "Cannot open image" in data["error"]

    def test_decode_unexpected_failure_logged_as_500(self, monkeypatch):
        def broken(image_bytes):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(vixyl.main, "decode_image", broken)
        with capture_logs() as logs:
            resp = client.post("/decode", files={"file": ("v.png", b"\x89PNG", "image/png")})
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Decoding failed"
        assert any(
            entry["event"] == "decode_endpoint_failed" and entry["log_level"] == "error"
            for entry in logs
        )
