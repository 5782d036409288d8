"""Shared fixtures."""

import json

import pytest


def write_profile(directory, key, conf, ovpn="client\nremote vpn.example.com 1194\n"):
    """Write a <key>.conf / <key>.ovpn pair."""
    (directory / f"{key}.conf").write_text(json.dumps(conf))
    if ovpn is not None:
        (directory / f"{key}.ovpn").write_text(ovpn)


@pytest.fixture
def profile_dir(tmp_path):
    """Profile directory with two profiles, the second unnamed."""
    directory = tmp_path / "profiles"
    directory.mkdir()
    write_profile(directory, "aaa111", {
        "name": "office",
        "user": "alice",
        "server": "vpn.example.com",
    })
    write_profile(directory, "bbb222", {
        "name": None,
        "user": "bob",
        "server": "lab",
        "password_mode": "otp_pin",
    }, ovpn="client\nauth-user-pass\nremote lab 1194\n")
    return directory
