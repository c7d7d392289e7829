import pytest

from app_lib.routes import HOME, LOGIN, find_route, page_routes, resolve_route, route_for


@pytest.mark.parametrize("path, page, params", [
    ("/events/new", "pages/Event_Form.py", {}),
    ("/events/42", "pages/Event_Details.py", {"id": "42"}),
    ("/events/42/edit", "pages/Event_Form.py", {"id": "42"}),
    ("/day/2025-06-10", "pages/Day_View.py", {"date": "2025-06-10"}),
    ("/calendar/?view=month", "pages/Calendar.py", {}),
])
def test_find_route(path, page, params):
    found = find_route(path)
    assert found.route.page == page
    assert found.params == params


def test_guest_is_sent_to_login():
    resolution = resolve_route("/events/42", authenticated=False)
    assert resolution.path == LOGIN
    assert resolution.redirected


def test_signed_in_user_skips_public_pages():
    resolution = resolve_route("/register", authenticated=True)
    assert resolution.path == HOME


def test_unknown_path_lands_on_dashboard():
    assert resolve_route("/nowhere", authenticated=True).path == HOME
    assert resolve_route("/nowhere", authenticated=False).path == LOGIN


def test_build_round_trips_params():
    resolution = resolve_route("/events/7/edit", authenticated=True)
    assert not resolution.redirected
    assert resolution.path == "/events/7/edit"


def test_page_routes_are_one_per_script():
    public = page_routes(public=True)
    protected = page_routes(public=False)
    assert [r.path for r in public] == ["/login", "/register", "/forgot-password"]
    assert len(protected) == 10
    assert route_for("/events/new").url_path == "event-form"


def test_route_for_unknown_path_raises():
    with pytest.raises(KeyError):
        route_for("/nowhere")
