import logging

import extra_streamlit_components as stx
import streamlit as st

from config.env import env
from config.constants import UI_CONSTANTS
from app_lib.exceptions import ApplicationException
from app_lib.routes import HOME, LOGIN, page_routes
from components.cookies import BrowserTokenStore
from components.navigation import enter_page, render_sidebar
from services.auth_service import auth_service

logging.basicConfig(
    level=getattr(logging, env.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# Configure logging to suppress benign WebSocket errors
# These errors occur when users refresh/close the page during auto-refresh
# and are properly handled by Tornado's async exception handler
class WebSocketErrorFilter(logging.Filter):
    def filter(self, record):
        # Suppress WebSocketClosedError and StreamClosedError
        if 'WebSocketClosedError' in str(record.msg) or 'StreamClosedError' in str(record.msg):
            return False
        if 'tornado.websocket' in record.name and 'exception' in str(record.msg).lower():
            return False
        return True


# Apply filter to root logger and Streamlit loggers
for logger_name in ['', 'streamlit', 'tornado.application']:
    logging.getLogger(logger_name).addFilter(WebSocketErrorFilter())

# THIS MUST BE THE VERY FIRST STREAMLIT COMMAND
st.set_page_config(
    page_title=UI_CONSTANTS["page_title"],
    layout=UI_CONSTANTS["layout"],
    page_icon=UI_CONSTANTS["page_icon"],
    initial_sidebar_state=UI_CONSTANTS["sidebar_state"],
)

# Resolve the stored token into a user once per session
auth_service.attach_token_store(BrowserTokenStore(stx.CookieManager(key="coropoti_cookies")))
try:
    user = auth_service.restore()
except ApplicationException as e:
    st.warning(e.message)
    user = auth_service.user

authenticated = auth_service.is_authenticated
landing = HOME if authenticated else LOGIN

# Guests only see the public pages and signed-in users only the protected
# ones, so every other path falls back to the default page
pages = {}
for route in page_routes(public=not authenticated):
    pages[route.title] = (route, st.Page(
        route.page,
        title=route.title,
        icon=route.icon,
        url_path=route.url_path,
        default=route.path == landing,
    ))

current = st.navigation([page for _, page in pages.values()])
enter_page(pages[current.title][0].page)

render_sidebar(user if authenticated else None)
current.run()
