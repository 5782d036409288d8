"""Tests for profile loading."""

import pytest

from conftest import write_profile


class TestLoadProfiles:
    """Tests for load_profiles."""

    def test_ids_follow_directory_order(self, profile_dir):
        """Test that IDs are 1-based in sorted file order."""
        from pritunl_cli.core.profiles import load_profiles

        profiles = load_profiles(profile_dir)

        assert list(profiles) == ["aaa111", "bbb222"]
        assert profiles["aaa111"].id == 1
        assert profiles["bbb222"].id == 2

    def test_empty_name_is_synthesized(self, profile_dir):
        """Test that a profile without a name gets '<user> (<server>)'."""
        from pritunl_cli.core.profiles import load_profiles

        profiles = load_profiles(profile_dir)

        assert profiles["aaa111"].name == "office"
        assert profiles["bbb222"].name == "bob (lab)"
        assert profiles["bbb222"].config.password_mode == "otp_pin"

    def test_synthesized_name_ignores_load_order(self, tmp_path):
        """Test that the synthesized name only depends on the profile's own fields."""
        from pritunl_cli.core.profiles import load_profiles

        write_profile(tmp_path, "zzz", {"name": "", "user": "carol", "server": "edge"})
        first = load_profiles(tmp_path)["zzz"]
        write_profile(tmp_path, "aaa", {"name": "other"})
        second = load_profiles(tmp_path)["zzz"]

        assert first.name == second.name == "carol (edge)"
        assert first.id == 1
        assert second.id == 2

    def test_key_is_stem_before_first_dot(self, tmp_path):
        """Test that the profile key is the file name up to the first dot."""
        from pritunl_cli.core.profiles import load_profiles

        write_profile(tmp_path, "abc.backup", {"name": "x"})

        assert list(load_profiles(tmp_path)) == ["abc"]

    def test_missing_directory_is_empty(self, tmp_path):
        """Test that a missing profile directory yields no profiles."""
        from pritunl_cli.core.profiles import load_profiles

        assert load_profiles(tmp_path / "nope") == {}

    def test_ignores_other_files(self, tmp_path):
        """Test that only .conf files are profiles."""
        from pritunl_cli.core.profiles import load_profiles

        (tmp_path / "notes.txt").write_text("hello")
        (tmp_path / "orphan.ovpn").write_text("client\n")

        assert load_profiles(tmp_path) == {}

    def test_corrupt_profile_aborts(self, profile_dir):
        """Test that one unparsable profile fails the whole load."""
        from pritunl_cli.core.profiles import load_profiles
        from pritunl_cli.errors import ProfileError

        (profile_dir / "ccc333.conf").write_text("{not json")

        with pytest.raises(ProfileError):
            load_profiles(profile_dir)

    def test_non_object_profile_aborts(self, tmp_path):
        """Test that a profile that is valid JSON but not an object fails."""
        from pritunl_cli.core.profiles import load_profiles
        from pritunl_cli.errors import ProfileError

        (tmp_path / "list.conf").write_text("[1, 2]")

        with pytest.raises(ProfileError):
            load_profiles(tmp_path)


class TestFindProfiles:
    """Tests for matching profiles by ID or name."""

    def test_match_by_id(self, profile_dir):
        """Test matching on the numeric ID as a string."""
        from pritunl_cli.core.profiles import find_profiles, load_profiles

        matches = find_profiles(load_profiles(profile_dir), "2")

        assert [p.key for p in matches] == ["bbb222"]

    def test_match_by_name(self, profile_dir):
        """Test matching on the display name, including synthesized ones."""
        from pritunl_cli.core.profiles import find_profiles, load_profiles

        profiles = load_profiles(profile_dir)

        assert [p.key for p in find_profiles(profiles, "office")] == ["aaa111"]
        assert [p.key for p in find_profiles(profiles, "bob (lab)")] == ["bbb222"]

    def test_match_is_exact(self, profile_dir):
        """Test that partial names and keys do not match."""
        from pritunl_cli.core.profiles import find_profiles, load_profiles

        profiles = load_profiles(profile_dir)

        assert find_profiles(profiles, "off") == []
        assert find_profiles(profiles, "aaa111") == []
        assert find_profiles(profiles, "01") == []

    def test_ovpn_path(self, profile_dir):
        """Test that the tunnel config sits next to the profile."""
        from pritunl_cli.core.profiles import load_profiles

        profile = load_profiles(profile_dir)["aaa111"]

        assert profile.ovpn_path == profile_dir / "aaa111.ovpn"
