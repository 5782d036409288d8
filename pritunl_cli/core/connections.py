"""Merge on-disk profiles with live connection state from the daemon."""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .profiles import Profile

log = logging.getLogger(__name__)

STATUS_DISCONNECTED = "Disconnected"
STATUS_CONNECTED = "Connected"

DAY = 24 * 60 * 60


@dataclass(frozen=True)
class ConnectionStatus:
    """Live state of one profile as reported by the daemon."""
    profile_key: str
    status: str
    timestamp: int = 0
    client_addr: str = ""
    server_addr: str = ""

    @classmethod
    def from_dict(cls, profile_key: str, data: dict) -> "ConnectionStatus":
        try:
            timestamp = int(data.get("timestamp") or 0)
        except (TypeError, ValueError):
            timestamp = 0
        return cls(
            profile_key=profile_key,
            status=str(data.get("status") or "").title(),
            timestamp=timestamp,
            client_addr=str(data.get("client_addr") or ""),
            server_addr=str(data.get("server_addr") or ""),
        )


@dataclass(frozen=True)
class ReconciledRow:
    """A profile joined with its live status."""
    id: int
    name: str
    status: str = STATUS_DISCONNECTED
    connected_for: str = ""
    clock_skew: bool = False
    client_addr: str = ""
    server_addr: str = ""

    @property
    def connected(self) -> bool:
        return self.status == STATUS_CONNECTED


def parse_connections(payload: dict) -> Dict[str, ConnectionStatus]:
    """Convert the daemon's 'profile' response into ConnectionStatus entries."""
    connections = {}
    for key, data in payload.items():
        if isinstance(data, dict):
            connections[key] = ConnectionStatus.from_dict(key, data)
        else:
            log.debug(f"Ignoring malformed connection entry for {key}")
    return connections


def format_duration(seconds: int) -> str:
    """Format elapsed seconds as '1 days 1 hrs 1 mins 1 secs'.

    Zero units are dropped, except seconds. Negative input is formatted
    by magnitude.
    """
    seconds = abs(int(seconds))
    days, seconds = divmod(seconds, DAY)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    parts = []
    if days:
        parts.append(f"{days} days")
    if hours:
        parts.append(f"{hours} hrs")
    if minutes:
        parts.append(f"{minutes} mins")
    parts.append(f"{seconds} secs")
    return " ".join(parts)


def reconcile(
        profiles: Dict[str, Profile],
        connections: Dict[str, ConnectionStatus],
        now: Optional[float] = None,
) -> List[ReconciledRow]:
    """Join profiles with live status, sorted by profile ID.

    Args:
        profiles: Dict of profile_key -> Profile
        connections: Dict of profile_key -> ConnectionStatus
        now: Current Unix time (defaults to time.time())

    Returns:
        One row per profile
    """
    if now is None:
        now = time.time()

    rows = []
    for key, profile in profiles.items():
        conn = connections.get(key)
        if conn is None:
            rows.append(ReconciledRow(id=profile.id, name=profile.name))
            continue

        since = ""
        skew = False
        if conn.timestamp > 0:
            elapsed = int(now - conn.timestamp)
            skew = elapsed < 0
            if skew:
                log.debug(f"Connection {key} started {-elapsed}s in the future")
            since = format_duration(elapsed)

        rows.append(ReconciledRow(
            id=profile.id,
            name=profile.name,
            status=conn.status or STATUS_DISCONNECTED,
            connected_for=since,
            clock_skew=skew,
            client_addr=conn.client_addr,
            server_addr=conn.server_addr,
        ))

    rows.sort(key=lambda r: r.id)
    return rows


def has_active_connection(rows: List[ReconciledRow]) -> bool:
    """Check if any row is connected; decides the extended table columns."""
    return any(row.connected for row in rows)
