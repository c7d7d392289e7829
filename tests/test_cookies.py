from unittest import mock

from components.cookies import TOKEN_COOKIE, BrowserTokenStore


def _cookies(value=None):
    cookies = mock.MagicMock()
    cookies.get.return_value = value
    return cookies


def test_load_returns_cookie_value():
    assert BrowserTokenStore(_cookies("tok")).load() == "tok"
    assert BrowserTokenStore(_cookies("")).load() is None


def test_session_cookie_without_remember():
    cookies = _cookies()
    BrowserTokenStore(cookies).save("tok")
    args, kwargs = cookies.set.call_args
    assert args == (TOKEN_COOKIE, "tok")
    assert kwargs["expires_at"] is None


def test_remembered_cookie_has_expiry():
    cookies = _cookies()
    BrowserTokenStore(cookies).save("tok", remember=True)
    assert cookies.set.call_args.kwargs["expires_at"] is not None


def test_clear_only_deletes_existing_cookie():
    cookies = _cookies()
    BrowserTokenStore(cookies).clear()
    cookies.delete.assert_not_called()

    cookies = _cookies("tok")
    BrowserTokenStore(cookies).clear()
    assert cookies.delete.call_args.args == (TOKEN_COOKIE,)
