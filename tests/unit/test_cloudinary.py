"""Unit tests for the Cloudinary upload client."""

from __future__ import annotations

import asyncio
import hashlib

import httpx
import pytest

from core import cloudinary
from core.errors import ConfigError

CREDENTIALS = cloudinary.CloudinaryCredentials(cloud_name="demo", api_key="key123", api_secret="s3cr3t")


def test_upload_image_posts_signed_request() -> None:
    """Upload sends credentials + signature and returns the secure URL."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.jpg"})

    url = asyncio.run(
        cloudinary.upload_image(
            credentials=CREDENTIALS,
            filename="x.jpg",
            data=b"\xff\xd8\xff",
            folder="delta38_ilustrativas",
            allowed_formats=["jpg", "png"],
            transport=httpx.MockTransport(handler),
        )
    )

    assert url == "https://res.cloudinary.com/demo/x.jpg"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1_1/demo/image/upload"
    body = request.content
    assert b'name="api_key"' in body
    assert b"key123" in body
    assert b'name="signature"' in body
    assert b"s3cr3t" not in body
    assert b'filename="x.jpg"' in body


def test_upload_image_signature_covers_sorted_params(monkeypatch: pytest.MonkeyPatch) -> None:
    """Signature is SHA-1 over the sorted upload params followed by the secret."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.jpg"})

    monkeypatch.setattr(cloudinary.time, "time", lambda: 1315060510)

    asyncio.run(
        cloudinary.upload_image(
            credentials=CREDENTIALS,
            filename="x.jpg",
            data=b"\xff\xd8\xff",
            folder="delta38_ilustrativas",
            allowed_formats=["jpg", "png"],
            transformation="c_limit,w_800,h_800",
            transport=httpx.MockTransport(handler),
        )
    )

    to_sign = (
        "allowed_formats=jpg,png&folder=delta38_ilustrativas"
        "&timestamp=1315060510&transformation=c_limit,w_800,h_800"
    )
    expected = hashlib.sha1((to_sign + "s3cr3t").encode("utf-8")).hexdigest()
    body = seen[0].content
    assert b'name="signature"\r\n\r\n' + expected.encode("ascii") in body
    assert b'name="timestamp"\r\n\r\n1315060510' in body


def test_upload_image_raises_on_error_status() -> None:
    """Non-200 responses become CloudinaryError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Invalid Signature"}})

    with pytest.raises(cloudinary.CloudinaryError):
        asyncio.run(
            cloudinary.upload_image(
                credentials=CREDENTIALS,
                filename="x.jpg",
                data=b"img",
                transport=httpx.MockTransport(handler),
            )
        )


def test_upload_image_rejects_empty_payload() -> None:
    """Empty files are refused before any request."""
    with pytest.raises(cloudinary.CloudinaryError):
        asyncio.run(cloudinary.upload_image(credentials=CREDENTIALS, filename="x.jpg", data=b""))


def test_credentials_from_env_reads_separate_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cloud name, key and secret can be set individually."""
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "k")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "s")

    assert cloudinary.credentials_from_env() == cloudinary.CloudinaryCredentials("demo", "k", "s")


def test_credentials_from_env_reads_cloudinary_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLOUDINARY_URL is accepted when the separate variables are absent."""
    for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CLOUDINARY_URL", "cloudinary://k:s@demo")

    assert cloudinary.credentials_from_env() == cloudinary.CloudinaryCredentials("demo", "k", "s")

    monkeypatch.setenv("CLOUDINARY_URL", "https://k:s@demo")
    with pytest.raises(ConfigError):
        cloudinary.credentials_from_env()
