import pytest

from app_lib.api.client import TOKEN_SESSION_KEY
from app_lib.exceptions import AuthorizationException, ValidationException
from services.auth_service import USER_SESSION_KEY, AuthService

USER = {"id": 7, "name": "Planning Office", "email": "plo@tesda.gov.ph", "role": "USER"}


@pytest.fixture
def store():
    return {}


@pytest.fixture
def auth(api, store):
    return AuthService(client=api, store=store)


def test_login_stores_token_and_refreshed_user(auth, api, store):
    api.post.return_value = {"token": "tok", "user": USER}
    api.get.return_value = dict(USER, name="Planning Office (PLO)")

    user = auth.login(" plo@tesda.gov.ph ", "secret")

    assert user.name == "Planning Office (PLO)"
    assert store[TOKEN_SESSION_KEY] == "tok"
    assert store[USER_SESSION_KEY]["name"] == "Planning Office (PLO)"
    assert auth.is_authenticated
    url = api.post.call_args.args[0]
    assert url.endswith("/auth/login")
    assert api.post.call_args.kwargs["data"]["email"] == "plo@tesda.gov.ph"


def test_login_requires_both_fields(auth, api):
    with pytest.raises(ValidationException, match="Email and password are required."):
        auth.login("", "secret")
    api.post.assert_not_called()


@pytest.mark.parametrize("password, confirm, message", [
    ("secret1", "secret2", "Passwords do not match."),
    ("abc", "abc", "Password must be at least 6 characters."),
])
def test_register_validation(auth, api, password, confirm, message):
    with pytest.raises(ValidationException, match=message):
        auth.register("Office", "o@tesda.gov.ph", password, confirm)
    api.post.assert_not_called()


def test_register_signs_in(auth, api, store):
    api.post.return_value = {"token": "tok", "user": USER}
    api.get.return_value = USER
    user = auth.register("Planning Office", "plo@tesda.gov.ph", "secret", "secret")
    assert user.id == 7
    assert api.post.call_args.args[0].endswith("/auth/register")


def test_rejected_token_signs_out(auth, api, store):
    store[TOKEN_SESSION_KEY] = "stale"
    api.get.side_effect = AuthorizationException("Invalid token", status_code=401)
    assert auth.restore() is None
    assert store == {}
    assert not auth.is_authenticated


def test_restore_uses_cached_user(auth, api, store):
    store[TOKEN_SESSION_KEY] = "tok"
    store[USER_SESSION_KEY] = USER
    assert auth.restore().email == "plo@tesda.gov.ph"
    api.get.assert_not_called()


def test_logout_clears_session(auth, store):
    store.update({TOKEN_SESSION_KEY: "tok", USER_SESSION_KEY: USER, "other": 1})
    auth.logout()
    assert store == {"other": 1}


class FakeTokenStore:
    def __init__(self, token=None):
        self.token = token
        self.remember = None

    def load(self):
        return self.token

    def save(self, token, remember=False):
        self.token = token
        self.remember = remember

    def clear(self):
        self.token = None


@pytest.fixture
def saved():
    return FakeTokenStore()


@pytest.fixture
def persistent_auth(api, store, saved):
    return AuthService(client=api, store=store, token_store=saved)


def test_login_saves_token_for_later_visits(persistent_auth, api, saved):
    api.post.return_value = {"token": "tok", "user": USER}
    api.get.return_value = USER

    persistent_auth.login("plo@tesda.gov.ph", "secret", remember=True)

    assert saved.token == "tok"
    assert saved.remember is True


def test_restore_reads_saved_token_after_reload(persistent_auth, api, store, saved):
    saved.token = "tok"
    api.get.return_value = USER

    user = persistent_auth.restore()

    assert user.id == 7
    assert store[TOKEN_SESSION_KEY] == "tok"
    assert persistent_auth.is_authenticated


def test_restore_without_saved_token_stays_signed_out(persistent_auth, api):
    assert persistent_auth.restore() is None
    api.get.assert_not_called()


def test_logout_clears_saved_token(persistent_auth, store, saved):
    saved.token = "tok"
    store.update({TOKEN_SESSION_KEY: "tok", USER_SESSION_KEY: USER})
    persistent_auth.logout()
    assert saved.token is None
    assert store == {}


def test_rejected_saved_token_is_cleared(persistent_auth, api, store, saved):
    saved.token = "stale"
    api.get.side_effect = AuthorizationException("Invalid token", status_code=401)
    assert persistent_auth.restore() is None
    assert saved.token is None
    assert store == {}
