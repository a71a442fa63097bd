"""
Tests for tagged secret requests and share links.
"""

import json
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from seqre.errors import AuthenticationFailure, InvalidEncoding, InvalidKeyEncoding
from seqre.keys import export_key, generate_key
from seqre.links import build_share_link, key_from_link, resource_url, split_share_link
from seqre.request import SecretKind, SecretRequest, open_sealed, seal


def test_seal_and_open_text():
    print("Testing text seal/open...", end=" ")
    sealed = seal(SecretRequest.text("hello world"))
    assert sealed.kind is SecretKind.TEXT
    assert len(sealed.token) == 22
    opened = open_sealed(sealed.data, sealed.token, SecretKind.TEXT)
    assert opened.kind is SecretKind.TEXT
    assert opened.as_text() == "hello world"
    print("PASS")


def test_seal_and_open_binary():
    print("Testing binary seal/open...", end=" ")
    image = os.urandom(2048)
    sealed = seal(SecretRequest.binary(image))
    opened = open_sealed(sealed.data, sealed.token)
    assert opened.payload == image
    try:
        opened.as_text()
    except TypeError:
        pass
    else:
        raise AssertionError("binary payload returned text")
    print("PASS")


def test_seal_uses_given_key():
    print("Testing seal with explicit key...", end=" ")
    key = generate_key()
    sealed = seal(SecretRequest.url("https://example.com/path?q=1"), key)
    assert sealed.token == export_key(key)
    assert open_sealed(sealed.data, sealed.token, SecretKind.URL).as_text() == "https://example.com/path?q=1"
    print("PASS")


def test_fresh_key_per_seal():
    print("Testing one key per secret...", end=" ")
    request = SecretRequest.text("same")
    assert seal(request).token != seal(request).token
    print("PASS")


def test_url_validation():
    print("Testing URL validation...", end=" ")
    for bad in ["ftp://example.com", "javascript:alert(1)", "example.com", "https://"]:
        try:
            SecretRequest.url(bad)
        except ValueError:
            continue
        raise AssertionError(f"{bad!r} was accepted")
    print("PASS")


def test_submission_never_contains_token():
    print("Testing submission body...", end=" ")
    sealed = seal(SecretRequest.text("top secret"))
    body = sealed.submission(onetime=True, expires_in=3600)
    assert body == {"kind": "text", "data": sealed.data, "onetime": True, "expires_in": 3600}
    serialized = json.dumps(body)
    assert sealed.token not in serialized
    assert "top secret" not in serialized
    assert sealed.token not in repr(sealed)
    for reserved in ("token", "key", "data"):
        try:
            sealed.submission(**{reserved: "x"})
        except ValueError:
            continue
        raise AssertionError(f"reserved field {reserved!r} was accepted")
    print("PASS")


def test_open_with_wrong_token():
    print("Testing open with wrong token...", end=" ")
    sealed = seal(SecretRequest.text("hello"))
    try:
        open_sealed(sealed.data, export_key(generate_key()), SecretKind.TEXT)
    except AuthenticationFailure:
        pass
    else:
        raise AssertionError("wrong token opened the secret")
    try:
        open_sealed(sealed.data, "not-a-token", SecretKind.TEXT)
    except InvalidKeyEncoding:
        pass
    else:
        raise AssertionError("malformed token accepted")
    print("PASS")


def test_open_text_requires_utf8():
    print("Testing text kind needs UTF-8...", end=" ")
    sealed = seal(SecretRequest.binary(b"\xff\xfe"))
    try:
        open_sealed(sealed.data, sealed.token, SecretKind.TEXT)
    except InvalidEncoding:
        pass
    else:
        raise AssertionError("non-UTF-8 payload opened as text")
    print("PASS")


def test_share_link_round_trip():
    print("Testing share links...", end=" ")
    key = generate_key()
    token = export_key(key)
    link = build_share_link("https://seq.re/s/abc123", token)
    assert link == f"https://seq.re/s/abc123#{token}"
    assert split_share_link(link) == ("https://seq.re/s/abc123", token)
    assert key_from_link(link) == key

    # An existing fragment is replaced, not appended to
    assert build_share_link("https://seq.re/s/abc#old", token) == f"https://seq.re/s/abc#{token}"
    print("PASS")


def test_share_link_errors():
    print("Testing share link errors...", end=" ")
    for link in ["https://seq.re/s/abc", "https://seq.re/s/abc#"]:
        try:
            split_share_link(link)
        except InvalidKeyEncoding:
            continue
        raise AssertionError(f"{link!r} was accepted")
    try:
        build_share_link("https://seq.re/s/abc", "")
    except InvalidKeyEncoding:
        pass
    else:
        raise AssertionError("empty token accepted")
    print("PASS")


def test_resource_url():
    print("Testing resource URLs...", end=" ")
    assert resource_url("https://seq.re/", "abc123") == "https://seq.re/s/abc123"
    assert resource_url("https://seq.re", "abc123", SecretKind.BINARY) == "https://seq.re/i/abc123"
    assert resource_url("https://seq.re", "abc123", SecretKind.URL) == "https://seq.re/abc123"
    print("PASS")


def main():
    print("=" * 50)
    print("  Secret Request + Link Tests")
    print("=" * 50)
    print()

    tests = [
        test_seal_and_open_text,
        test_seal_and_open_binary,
        test_seal_uses_given_key,
        test_fresh_key_per_seal,
        test_url_validation,
        test_submission_never_contains_token,
        test_open_with_wrong_token,
        test_open_text_requires_utf8,
        test_share_link_round_trip,
        test_share_link_errors,
        test_resource_url,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
