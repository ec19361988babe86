"""Worker identity resolution."""

from profit_dashboard.services.identity.debouncer import Debouncer
from profit_dashboard.services.identity.identity_resolver import (
    IdentityResolver,
    SessionUser,
    parse_session_user,
    settings_context_provider,
)

__all__ = [
    "Debouncer",
    "IdentityResolver",
    "SessionUser",
    "parse_session_user",
    "settings_context_provider",
]
