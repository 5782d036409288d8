"""Pritunl CLI - Core library."""

from .config import Settings
from .connections import (
    ConnectionStatus,
    ReconciledRow,
    format_duration,
    has_active_connection,
    parse_connections,
    reconcile,
)
from .credentials import (
    prompt_credentials,
    resolve_credentials,
)
from .profiles import (
    Profile,
    ProfileConfig,
    find_profiles,
    load_profiles,
)

__all__ = [
    # Config
    "Settings",
    # Profiles
    "Profile",
    "ProfileConfig",
    "find_profiles",
    "load_profiles",
    # Connections
    "ConnectionStatus",
    "ReconciledRow",
    "format_duration",
    "has_active_connection",
    "parse_connections",
    "reconcile",
    # Credentials
    "prompt_credentials",
    "resolve_credentials",
]
