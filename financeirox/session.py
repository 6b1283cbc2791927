# financeirox/session.py
# Role: Cookie session for FinanceiroX.
#       fx_session carries the user id (HMAC-signed), fx_session_last the
#       last-activity timestamp in epoch milliseconds. Both are httpOnly and
#       live for 7 days; the idle timeout is enforced from fx_session_last.

import hashlib
import hmac
import time

from fastapi import Response

from financeirox import config


def _signature(value: str) -> str:
    return hmac.new(
        config.SECRET_KEY.encode("utf-8"),
        value.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign_session(user_id: int) -> str:
    value = str(user_id)
    return f"{value}.{_signature(value)}"


def read_session(cookie_value: str | None) -> int | None:
    """
    Return the user id from a signed cookie value, or None when the value is
    malformed or the signature does not match.
    """
    if not cookie_value or "." not in cookie_value:
        return None
    value, sig = cookie_value.rsplit(".", 1)
    if not hmac.compare_digest(sig, _signature(value)):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def now_ms() -> int:
    return int(time.time() * 1000)


def is_idle_expired(last_value: str | None, now: int | None = None) -> bool:
    """
    True when the last activity is older than the idle timeout.
    A missing or unreadable timestamp counts as expired.
    """
    if not last_value:
        return True
    try:
        last = int(last_value)
    except ValueError:
        return True
    now = now_ms() if now is None else now
    return now - last > config.SESSION_IDLE_MINUTES * 60 * 1000


def _set(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.SECURE_COOKIES,
    )


def touch_session(response: Response) -> None:
    _set(response, config.SESSION_LAST_COOKIE, str(now_ms()), config.SESSION_MAX_AGE)


def set_session_cookies(response: Response, user_id: int) -> None:
    _set(response, config.SESSION_COOKIE, sign_session(user_id), config.SESSION_MAX_AGE)
    touch_session(response)


def clear_session_cookies(response: Response) -> None:
    _set(response, config.SESSION_COOKIE, "", 0)
    _set(response, config.SESSION_LAST_COOKIE, "", 0)
