"""Client for the Pritunl client daemon's local HTTP API."""

import http.client
import json
import logging
import socket
from typing import Optional
from urllib.parse import urlsplit

from ..errors import PritunlError
from .platform import BASE_URL, SOCKET_PATH

log = logging.getLogger(__name__)


class DaemonError(PritunlError):
    """Error communicating with daemon."""
    pass


class DaemonNotRunning(DaemonError):
    """Daemon is not running."""
    pass


class UnixHTTPConnection(http.client.HTTPConnection):
    """HTTP connection over a Unix domain socket."""

    def __init__(self, socket_path: str, timeout: Optional[float] = None):
        super().__init__("unix", timeout=timeout)
        self._socket_path = socket_path

    def connect(self):
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect(self._socket_path)
        except OSError:
            sock.close()
            raise
        self.sock = sock


class DaemonClient:
    """Client for sending requests to the Pritunl client daemon."""

    def __init__(
            self,
            auth_key: str = "",
            socket_path: Optional[str] = SOCKET_PATH,
            base_url: str = BASE_URL,
            timeout: Optional[float] = None,
    ):
        """Initialize client.

        Args:
            auth_key: Value sent in the Auth-Key header
            socket_path: Unix socket to use, or None for loopback HTTP
            base_url: Daemon URL used when socket_path is None
            timeout: Socket timeout in seconds, None blocks
        """
        self._auth_key = auth_key
        self._socket_path = socket_path
        self._base_url = base_url
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "DaemonClient":
        """Create a client from Settings, reading the auth key once."""
        return cls(
            auth_key=settings.read_auth_key(),
            socket_path=settings.socket_path if settings.unix_socket else None,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    def _connection(self) -> http.client.HTTPConnection:
        if self._socket_path:
            return UnixHTTPConnection(self._socket_path, timeout=self._timeout)
        url = urlsplit(self._base_url)
        return http.client.HTTPConnection(url.hostname, url.port, timeout=self._timeout)

    def _url_path(self, endpoint: str) -> str:
        if self._socket_path:
            return "/" + endpoint
        return urlsplit(self._base_url).path.rstrip("/") + "/" + endpoint

    def request(self, method: str, endpoint: str, data: Optional[dict] = None) -> str:
        """Send a request to the daemon and return the response body.

        Args:
            method: HTTP verb (GET, POST, DELETE)
            endpoint: Endpoint name, e.g. 'profile'
            data: JSON body, or None for an empty body

        Returns:
            Response body text

        Raises:
            DaemonNotRunning: If the daemon socket is missing or refuses connections
            DaemonError: On any other transport failure or non-200 status
        """
        body = json.dumps(data).encode("utf-8") if data is not None else b""
        headers = {
            "User-Agent": "pritunl",
            "Content-Type": "application/json",
            "Auth-Key": self._auth_key,
        }
        log.debug(f"{method} {endpoint}")

        conn = self._connection()
        try:
            conn.request(method, self._url_path(endpoint), body=body, headers=headers)
            resp = conn.getresponse()
            payload = resp.read().decode("utf-8")
        except FileNotFoundError:
            raise DaemonNotRunning(
                f"Pritunl client not running (no socket at {self._socket_path})"
            )
        except ConnectionRefusedError:
            raise DaemonNotRunning("Pritunl client not responding")
        except socket.timeout:
            raise DaemonError(f"Timeout waiting for {method} {endpoint}")
        except (OSError, http.client.HTTPException) as e:
            raise DaemonError(f"Error making request ({method} {endpoint}): {e}")
        finally:
            conn.close()

        if resp.status != 200:
            raise DaemonError(f"Daemon returned {resp.status} for {method} {endpoint}")
        return payload

    def _request_json(self, method: str, endpoint: str, data: Optional[dict] = None) -> dict:
        payload = self.request(method, endpoint, data)
        if not payload.strip():
            return {}
        try:
            result = json.loads(payload)
        except json.JSONDecodeError as e:
            raise DaemonError(f"Invalid response from daemon: {e}")
        if not isinstance(result, dict):
            raise DaemonError("Invalid response from daemon: expected a JSON object")
        return result

    def status(self) -> str:
        """Get the daemon status string."""
        value = self._request_json("GET", "status").get("status", "")
        if isinstance(value, bool):
            return json.dumps(value)
        return "" if value is None else str(value)

    def ping(self) -> bool:
        """Check if the daemon answers with an empty 200.

        Returns:
            True if daemon is responding
        """
        try:
            return self.request("GET", "ping") == ""
        except DaemonError:
            return False

    def get_connections(self) -> dict:
        """Get live connection state keyed by profile.

        Returns:
            Dict of profile_key -> status dict ('status', 'timestamp',
            'client_addr', 'server_addr', ...)
        """
        return self._request_json("GET", "profile")

    def stop_connections(self):
        """Stop all connections."""
        self.request("POST", "stop")

    def connect_profile(self, profile_key: str, username: str, password: str, data: str):
        """Start a connection.

        Args:
            profile_key: Profile identifier (file stem)
            username: Username sent to the server, may be empty
            password: Password, PIN and/or OTP code, may be empty
            data: Tunnel config, with the keychain secret appended if any
        """
        self.request("POST", "profile", {
            "id": profile_key,
            "reconnect": True,
            "timeout": True,
            "username": username,
            "password": password,
            "data": data,
        })

    def disconnect_profile(self, profile_key: str):
        """Stop a single connection."""
        self.request("DELETE", "profile", {"id": profile_key})
