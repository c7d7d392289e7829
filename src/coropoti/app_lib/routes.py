"""
Client routes and auth redirects.

Paths are the browser-facing routes of the scheduling client. Each maps to a
page script; path parameters become query parameters of that page.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

LOGIN = "/login"
HOME = "/dashboard"


@dataclass(frozen=True)
class Route:
    path: str
    page: str
    title: str
    icon: str = ""
    public_only: bool = False
    in_menu: bool = True
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        pattern = re.sub(r":(\w+)", r"(?P<\1>[^/]+)", self.path)
        object.__setattr__(self, "regex", re.compile(f"^{pattern}/?$"))

    @property
    def url_path(self) -> str:
        """Streamlit page url_path: the static part of the route."""
        return self.page.rsplit("/", 1)[-1][:-3].lower().replace("_", "-")

    def match(self, path: str) -> Optional[Dict[str, str]]:
        found = self.regex.match(path)
        return found.groupdict() if found else None

    def build(self, **params) -> str:
        path = self.path
        for key, value in params.items():
            path = path.replace(f":{key}", str(value))
        return path


ROUTES: List[Route] = [
    Route("/login", "pages/Login.py", "Sign in", ":material/login:", public_only=True),
    Route("/register", "pages/Register.py", "Register", ":material/person_add:", public_only=True),
    Route("/forgot-password", "pages/Forgot_Password.py", "Forgot password", ":material/lock_reset:", public_only=True),
    Route("/dashboard", "pages/Dashboard.py", "Dashboard", ":material/dashboard:"),
    Route("/calendar", "pages/Calendar.py", "Calendar", ":material/calendar_month:"),
    Route("/invitations", "pages/Invitations.py", "Invitations", ":material/mail:"),
    Route("/upcoming", "pages/Upcoming.py", "Upcoming", ":material/upcoming:"),
    Route("/year-events", "pages/Year_Events.py", "Year events", ":material/date_range:"),
    Route("/recent", "pages/Recent.py", "Recent", ":material/history:"),
    Route("/events/new", "pages/Event_Form.py", "Create event", ":material/add:"),
    Route("/events/:id/edit", "pages/Event_Form.py", "Edit event", ":material/edit:", in_menu=False),
    Route("/events/:id", "pages/Event_Details.py", "Event details", ":material/event:", in_menu=False),
    Route("/day/:date", "pages/Day_View.py", "Day view", ":material/today:", in_menu=False),
    Route("/profile", "pages/Profile.py", "Profile", ":material/account_circle:"),
]


@dataclass(frozen=True)
class Resolution:
    route: Route
    params: Dict[str, str]
    redirected: bool = False

    @property
    def path(self) -> str:
        return self.route.build(**self.params)


def find_route(path: str) -> Optional[Resolution]:
    clean = "/" + (path or "").split("?", 1)[0].strip("/")
    for route in ROUTES:
        params = route.match(clean)
        if params is not None:
            return Resolution(route, params)
    return None


def route_for(path: str) -> Route:
    found = find_route(path)
    if found is None:
        raise KeyError(path)
    return found.route


def resolve_route(path: str, authenticated: bool) -> Resolution:
    """
    Where a navigation to `path` ends up: guests go to the login page,
    signed-in users skip the public-only pages, unknown paths land on the
    dashboard.
    """
    found = find_route(path) or Resolution(route_for(HOME), {}, redirected=True)
    if not authenticated and not found.route.public_only:
        return Resolution(route_for(LOGIN), {}, redirected=True)
    if authenticated and found.route.public_only:
        return Resolution(route_for(HOME), {}, redirected=True)
    return found


def page_routes(public: bool) -> List[Route]:
    """One route per page script, for building the navigation menu."""
    seen, out = set(), []
    for route in ROUTES:
        if route.public_only != public or route.page in seen:
            continue
        seen.add(route.page)
        out.append(route)
    return out
