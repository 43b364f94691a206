"""
MemoPad Backend — Session Cookie Tests
========================================

What:  Signing and unsigning of the session cookie value.
How:   Pure function tests; no HTTP.
"""

from itsdangerous import TimestampSigner

from app.sessions import SESSION_SALT, sign_handle, unsign_handle


class TestCookieSigning:

    def test_roundtrip(self):
        signed = sign_handle("abc123")

        assert signed != "abc123"
        assert unsign_handle(signed) == "abc123"

    def test_tampered_value_is_rejected(self):
        signed = sign_handle("abc123")
        tampered = "xyz789" + signed[len("abc123"):]

        assert unsign_handle(tampered) is None

    def test_wrong_secret_is_rejected(self):
        forged = TimestampSigner("some-other-secret", salt=SESSION_SALT).sign("abc123").decode()

        assert unsign_handle(forged) is None

    def test_missing_value(self):
        assert unsign_handle(None) is None
        assert unsign_handle("") is None

    def test_unsigned_handle_is_rejected(self):
        assert unsign_handle("abc123") is None
