from financeirox import config
from financeirox.session import is_idle_expired, read_session, sign_session


def test_signed_session_round_trip():
    assert read_session(sign_session(42)) == 42


def test_tampered_session_is_rejected():
    value = sign_session(42)
    _, sig = value.rsplit(".", 1)

    assert read_session(f"43.{sig}") is None
    assert read_session("42") is None
    assert read_session("") is None
    assert read_session(None) is None


def test_idle_timeout():
    now = 10_000_000_000
    idle_ms = config.SESSION_IDLE_MINUTES * 60 * 1000

    assert not is_idle_expired(str(now - 1000), now=now)
    assert not is_idle_expired(str(now - idle_ms), now=now)
    assert is_idle_expired(str(now - idle_ms - 1), now=now)
    assert is_idle_expired(None, now=now)
    assert is_idle_expired("yesterday", now=now)
