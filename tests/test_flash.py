from unittest import mock

from components.event_modal import FLASH_KEY, flash, show_flash


@mock.patch("components.event_modal.st")
def test_flash_survives_rerun_and_shows_once(st):
    st.session_state = {}

    flash("Profile saved.")
    assert st.session_state[FLASH_KEY] == "Profile saved."

    show_flash()
    st.success.assert_called_once_with("Profile saved.")
    assert FLASH_KEY not in st.session_state

    show_flash()
    st.success.assert_called_once()
