# Core logic that does not depend on the HTTP layer:
# - password hashing
# - failed login throttling
# - listing query building and pagination
from .password import PasswordHasher
from .query import Page, QuerySpec, SearchFilter, build_query, paginate
from .throttle import LoginThrottle

__all__ = [
    "LoginThrottle",
    "Page",
    "PasswordHasher",
    "QuerySpec",
    "SearchFilter",
    "build_query",
    "paginate",
]
