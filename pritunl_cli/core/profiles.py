"""Profile discovery from the Pritunl client's profile directory."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..errors import ProfileError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileConfig:
    """Fields of a <key>.conf file the CLI uses."""
    name: str = ""
    user: str = ""
    server: str = ""
    password_mode: str = ""
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: dict) -> "ProfileConfig":
        """Build a config, naming it '<user> (<server>)' when the name is empty."""
        user = _text(data.get("user"))
        server = _text(data.get("server"))
        name = _text(data.get("name")) or f"{user} ({server})"
        return cls(
            name=name,
            user=user,
            server=server,
            password_mode=_text(data.get("password_mode")),
            raw=data,
        )


@dataclass(frozen=True)
class Profile:
    """A profile found on disk."""
    key: str
    path: Path
    id: int
    config: ProfileConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def ovpn_path(self) -> Path:
        """Companion tunnel config file."""
        return self.path.with_name(f"{self.key}.ovpn")

    def matches(self, target: str) -> bool:
        """Check if target is this profile's ID or name."""
        return target == str(self.id) or target == self.name


def _text(value) -> str:
    if value is None:
        return ""
    return str(value)


def load_profiles(directory: Path) -> Dict[str, Profile]:
    """Load all profiles in a directory.

    IDs are 1-based positions in the sorted directory listing, so they
    shift when profiles are added or removed.

    Args:
        directory: Pritunl profile directory

    Returns:
        Dict of profile_key -> Profile, in ID order

    Raises:
        ProfileError: If any profile file cannot be read or parsed
    """
    directory = Path(directory)
    if not directory.is_dir():
        log.debug(f"Profile directory {directory} does not exist")
        return {}

    profiles = {}
    for i, path in enumerate(sorted(directory.glob("*.conf")), 1):
        key = path.name.split(".")[0]
        try:
            data = json.loads(path.read_text())
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Error loading profile {path}: {e}")
        except json.JSONDecodeError as e:
            raise ProfileError(f"Invalid profile {path}: {e}")
        if not isinstance(data, dict):
            raise ProfileError(f"Invalid profile {path}: expected a JSON object")

        profiles[key] = Profile(key=key, path=path, id=i, config=ProfileConfig.from_dict(data))
        log.debug(f"Loaded profile {i}: {key} ({profiles[key].name})")

    return profiles


def find_profiles(profiles: Dict[str, Profile], target: str) -> List[Profile]:
    """Get every profile whose ID or name equals target."""
    return [p for p in profiles.values() if p.matches(target)]
