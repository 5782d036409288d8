"""Credential resolution for connecting a profile.

Decides whether a profile's tunnel config needs credentials, fetches the
profile secret from the keychain where Pritunl keeps one, and prompts for
whatever the user did not supply.
"""

import base64
import binascii
import getpass
import logging
from dataclasses import dataclass
from typing import Tuple

import keyring
from keyring.errors import KeyringError, KeyringLocked

from ..daemon.platform import use_keychain
from ..errors import CredentialError, KeychainLocked, ProfileError
from .profiles import Profile

log = logging.getLogger(__name__)

KEYCHAIN_SERVICE = "pritunl"
AUTH_MARKER = "auth-user-pass"
DEFAULT_TOKEN_USER = "pritunl"


@dataclass(frozen=True)
class Credentials:
    """Everything the daemon needs to start a connection."""
    data: str
    auth_mode: str
    username: str
    password: str


def needs_auth(ovpn: str, password_mode: str = "") -> str:
    """Get the auth mode a tunnel config requires.

    A bare 'auth-user-pass' line (no credentials file argument) means the
    server wants credentials. The profile's password_mode, when set,
    names the kind.

    Returns:
        '' if no credentials are needed, else 'creds' or the password_mode
    """
    auth = ""
    for line in ovpn.split("\n"):
        if AUTH_MARKER in line and len(line) <= 17:
            auth = "creds"
    if auth and password_mode:
        auth = password_mode
    return auth


def get_keychain_secret(profile_key: str) -> str:
    """Get the decoded per-profile secret from the keychain.

    Returns:
        Secret text, or '' if none is stored

    Raises:
        KeychainLocked: If the keychain is locked
        CredentialError: On other keychain errors or bad base64
    """
    try:
        secret = keyring.get_password(KEYCHAIN_SERVICE, profile_key)
    except KeyringLocked:
        raise KeychainLocked(
            "There was an error accessing the Keychain (probably connected through SSH)"
        )
    except KeyringError as e:
        raise CredentialError(f"Error getting profile secret from keychain: {e}")

    if not secret:
        log.debug(f"No keychain secret for {profile_key}")
        return ""
    try:
        return base64.b64decode(secret.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise CredentialError(f"Error decoding base64: {e}")


def load_tunnel_config(profile: Profile) -> Tuple[str, str]:
    """Read a profile's tunnel config and work out its auth mode.

    Returns:
        (data, auth_mode) where data is the tunnel config with the
        keychain secret appended

    Raises:
        ProfileError: If the .ovpn file cannot be read
    """
    try:
        ovpn = profile.ovpn_path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileError(f"Error getting profile: {e}")

    auth = needs_auth(ovpn, profile.config.password_mode)
    log.debug(f"Profile {profile.key} auth mode: {auth or 'none'}")

    key = get_keychain_secret(profile.key) if use_keychain() else ""
    return ovpn + "\n" + key, auth


def prompt_credentials(auth_mode: str, username: str = "", password: str = "") -> Tuple[str, str]:
    """Fill in missing credentials interactively.

    PIN and OTP modes send a fixed username and a password made of the
    PIN followed by the one-time code.

    Returns:
        (username, password)
    """
    if not auth_mode or (username and password):
        return username, password

    if auth_mode[-3:] in ("otp", "pin"):
        username = username or DEFAULT_TOKEN_USER
        if not password:
            label = "PIN" if "pin" in auth_mode else "OTP code"
            secret = getpass.getpass(f"Enter the {label}: ")
            otp = ""
            if "pin" in auth_mode and "otp" in auth_mode:
                otp = input("Enter the OTP code: ").strip()
            password = secret + otp

    if not username:
        username = input("Enter the username: ").strip()
    if not password:
        password = getpass.getpass("Enter the password: ")

    return username, password


def resolve_credentials(profile: Profile, username: str = "", password: str = "") -> Credentials:
    """Build the connect request payload for a profile.

    Args:
        profile: Profile to connect
        username: Username given on the command line
        password: Password given on the command line

    Returns:
        Credentials
    """
    data, auth = load_tunnel_config(profile)
    username, password = prompt_credentials(auth, username, password)
    return Credentials(data=data, auth_mode=auth, username=username, password=password)
