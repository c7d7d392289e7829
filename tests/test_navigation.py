from unittest import mock

import pytest

from components import navigation
from components.navigation import CURRENT_PAGE_KEY, PARAMS_KEY, enter_page, route_param

FORM_PAGE = "pages/Event_Form.py"


@pytest.fixture
def session():
    with mock.patch.object(navigation, "st") as st, \
            mock.patch.object(navigation, "auth_service") as auth:
        st.session_state = {}
        st.query_params = {}
        auth.is_authenticated = True
        yield st


def test_go_hands_params_to_the_target_page(session):
    navigation.go("/events/12/edit")
    assert session.session_state[PARAMS_KEY] == {"page": FORM_PAGE, "params": {"id": "12"}}
    session.switch_page.assert_called_once_with(FORM_PAGE)


def test_go_keeps_query_string_params(session):
    navigation.go("/events/new?date=2025-06-10")
    assert session.session_state[PARAMS_KEY]["params"] == {"date": "2025-06-10"}


def test_guest_redirect_drops_params(session):
    navigation.auth_service.is_authenticated = False
    navigation.go("/events/12")
    assert session.session_state[PARAMS_KEY] == {"page": "pages/Login.py", "params": {}}


def test_params_become_the_query_string_once():
    state, query = {}, {"stale": "1"}
    state[PARAMS_KEY] = {"page": FORM_PAGE, "params": {"id": "12"}}

    enter_page(FORM_PAGE, state, query)
    assert query == {"id": "12"}
    assert state[CURRENT_PAGE_KEY] == FORM_PAGE
    assert PARAMS_KEY not in state
    assert route_param("id", query=query) == "12"

    # A rerun of the same page keeps its query string
    enter_page(FORM_PAGE, state, query)
    assert route_param("id", query=query) == "12"


def test_menu_visit_after_edit_opens_a_blank_form():
    state, query = {}, {}
    state[PARAMS_KEY] = {"page": FORM_PAGE, "params": {"id": "12"}}
    enter_page(FORM_PAGE, state, query)

    # Sidebar navigation clears the query string before the entry script runs
    query.clear()
    enter_page(FORM_PAGE, state, query)
    assert route_param("id", query=query) is None


def test_params_for_another_page_are_discarded():
    state, query = {PARAMS_KEY: {"page": "pages/Day_View.py", "params": {"date": "2025-06-10"}}}, {}
    enter_page("pages/Calendar.py", state, query)
    assert PARAMS_KEY not in state
    assert query == {}
    assert route_param("date", "today", query=query) == "today"
