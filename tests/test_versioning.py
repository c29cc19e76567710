"""Unit tests for NuGet version comparison."""

import pytest

from nuget_feed_tools.versioning import NuGetVersion, compare_versions, satisfies_minimum


class TestNuGetVersion:
    """Test version parsing and ordering."""

    @pytest.mark.parametrize("lower, higher", [
        ("1.0.0", "1.0.1"),
        ("1.0.0", "1.1.0"),
        ("1.9.0", "1.10.0"),
        ("1.0.0-alpha", "1.0.0"),
        ("1.0.0-alpha", "1.0.0-beta"),
        ("1.0.0-alpha.2", "1.0.0-alpha.10"),
        ("1.0.0-1", "1.0.0-alpha"),
        ("1.0.0-alpha", "1.0.0-alpha.1"),
        ("1.0.0", "1.0.0.1"),
        ("0.0.0", "0.0.1-pre"),
    ])
    def test_ordering(self, lower, higher):
        assert NuGetVersion(lower) < NuGetVersion(higher)
        assert compare_versions(lower, higher) == -1
        assert compare_versions(higher, lower) == 1

    @pytest.mark.parametrize("left, right", [
        ("1.0", "1.0.0"),
        ("1.0.0.0", "1.0.0"),
        ("1.0.0+build.5", "1.0.0"),
        ("1.0.0-BETA", "1.0.0-beta"),
    ])
    def test_equivalent_versions(self, left, right):
        assert NuGetVersion(left) == NuGetVersion(right)
        assert compare_versions(left, right) == 0

    def test_prerelease_flag(self):
        assert NuGetVersion("2.0.0-rc1").is_prerelease
        assert not NuGetVersion("2.0.0").is_prerelease

    @pytest.mark.parametrize("value", ["", "   ", "abc", "1.0.0.0.0", "1..0"])
    def test_invalid_versions(self, value):
        with pytest.raises(ValueError):
            NuGetVersion(value)


class TestSatisfiesMinimum:
    """Test the lower-bound check used by package queries."""

    def test_inclusive_floor(self):
        assert satisfies_minimum("0.0.0", "0.0.0")
        assert satisfies_minimum("1.2.3", "0.0.0")

    def test_exclusive_floor(self):
        assert not satisfies_minimum("1.0.0", "1.0.0", min_inclusive=False)
        assert satisfies_minimum("1.0.1", "1.0.0", min_inclusive=False)

    def test_below_floor(self):
        assert not satisfies_minimum("0.9.0", "1.0.0")

    def test_unparseable_version_kept(self):
        assert satisfies_minimum("not-a-version", "0.0.0")
