"""Pritunl client daemon access."""

from .client import DaemonClient, DaemonError, DaemonNotRunning
from .platform import get_auth_key_path, get_profile_dir, use_unix_socket

__all__ = [
    "DaemonClient",
    "DaemonError",
    "DaemonNotRunning",
    "get_auth_key_path",
    "get_profile_dir",
    "use_unix_socket",
]
