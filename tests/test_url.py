"""
Unit Tests for Url
Tests URL assembly and HMAC-SHA1 signing
"""

import base64
import dataclasses
import hashlib
import hmac
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from thumbor_url.models.url import Url, sign


SERVER = "http://thumbor.example.com"
SECRET = "my-secret-key"
ORIGINAL = "http://images.example.com/llamas.jpg"


def expected_signature(secret: str, payload: str) -> str:
    digest = hmac.new(secret.encode(), payload.encode(), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode().rstrip("=")


class TestUnsafeUrl:
    """Test cases for URLs generated without a secret."""

    def test_unsafe_url(self):
        url = Url(SERVER, "", ORIGINAL, "fit-in/320x240")
        assert url.render() == f"{SERVER}/unsafe/fit-in/320x240/{ORIGINAL}"
        assert str(url) == url.render()
        assert url.signature is None
        assert not url.is_signed

    @pytest.mark.parametrize("secret", ["", None])
    def test_missing_secret_is_unsafe(self, secret):
        url = Url(SERVER, secret, ORIGINAL, "100x100")
        assert url.path.startswith("unsafe/")

    def test_empty_commands(self):
        url = Url(SERVER, "", ORIGINAL)
        assert url.render() == f"{SERVER}/unsafe/{ORIGINAL}"

    def test_trailing_slash_on_server_is_stripped(self):
        url = Url(SERVER + "/", "", ORIGINAL, "100x100")
        assert url.render() == f"{SERVER}/unsafe/100x100/{ORIGINAL}"

    def test_relative_original(self):
        url = Url(SERVER, "", "images/llamas.jpg", "100x100")
        assert url.render() == f"{SERVER}/unsafe/100x100/images/llamas.jpg"


class TestSignedUrl:
    """Test cases for URLs signed with a secret."""

    def test_signed_url(self):
        url = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240")
        signature = expected_signature(SECRET, f"fit-in/320x240/{ORIGINAL}")

        assert url.is_signed
        assert url.signature == signature
        assert url.render() == f"{SERVER}/{signature}/fit-in/320x240/{ORIGINAL}"

    def test_signature_over_original_only_when_no_commands(self):
        url = Url(SERVER, SECRET, ORIGINAL)
        assert url.signature == expected_signature(SECRET, ORIGINAL)
        assert url.path == f"{url.signature}/{ORIGINAL}"

    def test_signature_is_urlsafe_base64_without_padding(self):
        url = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240")
        signature = url.path.split("/")[0]

        assert signature != "unsafe"
        assert "=" not in signature
        assert "+" not in signature
        assert len(signature) == 27  # 20-byte SHA1 digest
        decoded = base64.urlsafe_b64decode(signature + "=")
        assert decoded == hmac.new(SECRET.encode(), f"fit-in/320x240/{ORIGINAL}".encode(), hashlib.sha1).digest()

    def test_deterministic(self):
        first = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240/filters:brightness(42)")
        second = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240/filters:brightness(42)")
        assert first.render() == second.render()
        assert first == second

    @pytest.mark.parametrize("secret, original, commands", [
        ("my-secret-kez", ORIGINAL, "fit-in/320x240"),
        (SECRET, "http://images.example.com/llamas.jpeg", "fit-in/320x240"),
        (SECRET, ORIGINAL, "fit-in/320x241"),
    ])
    def test_any_input_change_changes_signature(self, secret, original, commands):
        baseline = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240")
        changed = Url(SERVER, secret, original, commands)
        assert changed.signature != baseline.signature

    def test_sign_helper(self):
        payload = f"fit-in/320x240/{ORIGINAL}"
        assert sign(SECRET, payload) == expected_signature(SECRET, payload)

    def test_url_is_immutable(self):
        url = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240")
        with pytest.raises(dataclasses.FrozenInstanceError):
            url.original = "http://images.example.com/other.jpg"

    def test_repr_hides_secret(self):
        url = Url(SERVER, SECRET, ORIGINAL, "fit-in/320x240")
        assert SECRET not in repr(url)
