"""Error categories shared by all layers.

Nothing below the command dispatch terminates the process; every
failure is raised as one of these and reported by ``cli.main``.
"""


class PritunlError(Exception):
    """Base class for handled failures."""
    pass


class ProfileError(PritunlError):
    """A profile or tunnel config file could not be read or parsed."""
    pass


class CredentialError(PritunlError):
    """Keychain access or secret decoding failed."""
    pass


class KeychainLocked(CredentialError):
    """The keychain is locked (usually when logged in over SSH)."""

    hint = "Run '/usr/bin/security unlock-keychain' to unlock the Keychain and try again"


class UsageError(PritunlError):
    """Invalid command line input."""
    pass
