"""Runtime settings for talking to the local Pritunl client."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..daemon.platform import (
    BASE_URL,
    SOCKET_PATH,
    get_auth_key_path,
    get_profile_dir,
    use_unix_socket,
)
from ..errors import PritunlError

log = logging.getLogger(__name__)


@dataclass
class Settings:
    """Locations and transport options, resolved once at startup."""
    profile_dir: Path = field(default_factory=get_profile_dir)
    auth_key_path: Path = field(default_factory=get_auth_key_path)
    socket_path: str = SOCKET_PATH
    base_url: str = BASE_URL
    unix_socket: bool = field(default_factory=use_unix_socket)
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from platform defaults and PRITUNL_* overrides.

        Args:
            environ: Mapping to read overrides from (defaults to os.environ)

        Returns:
            Settings instance
        """
        env = os.environ if environ is None else environ
        settings = cls()

        if env.get("PRITUNL_PROFILE_DIR"):
            settings.profile_dir = Path(env["PRITUNL_PROFILE_DIR"])
        if env.get("PRITUNL_AUTH_KEY_PATH"):
            settings.auth_key_path = Path(env["PRITUNL_AUTH_KEY_PATH"])
        if env.get("PRITUNL_SOCKET"):
            settings.socket_path = env["PRITUNL_SOCKET"]
        if env.get("PRITUNL_URL"):
            settings.base_url = env["PRITUNL_URL"]
        if env.get("PRITUNL_TIMEOUT"):
            try:
                settings.timeout = float(env["PRITUNL_TIMEOUT"])
            except ValueError:
                log.warning(f"Ignoring invalid PRITUNL_TIMEOUT: {env['PRITUNL_TIMEOUT']!r}")

        return settings

    def read_auth_key(self) -> str:
        """Read the daemon auth key, empty if the key file does not exist."""
        try:
            return self.auth_key_path.read_text().strip()
        except FileNotFoundError:
            log.debug(f"No auth key at {self.auth_key_path}")
            return ""
        except OSError as e:
            raise PritunlError(f"Error getting key: {e}")
