"""Cross-platform paths for the Pritunl client daemon."""

import os
import sys
from pathlib import Path

SOCKET_PATH = "/var/run/pritunl.sock"
BASE_URL = "http://localhost:9770/"


# === Paths ===

def get_auth_key_path() -> Path:
    """Get the file holding the daemon auth key."""
    if sys.platform == "win32":
        return Path(r"C:\ProgramData\Pritunl\auth")
    return Path("/var/run/pritunl.auth")


def get_profile_dir() -> Path:
    """Get the directory the Pritunl client stores profiles in."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", ""))
        return base / "pritunl" / "profiles"
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pritunl" / "profiles"
    else:
        return Path.home() / ".config" / "pritunl" / "profiles"


# === Capabilities ===

def use_unix_socket() -> bool:
    """Check if the daemon listens on a Unix socket instead of loopback TCP."""
    return sys.platform == "darwin" or sys.platform.startswith("linux")


def use_keychain() -> bool:
    """Check if profile secrets are kept in the platform keychain."""
    return sys.platform == "darwin"


def use_color() -> bool:
    """Check if status text should carry ANSI colors."""
    return sys.platform != "win32"
