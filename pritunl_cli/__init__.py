"""Pritunl command line client."""

__version__ = "1.2.0"
