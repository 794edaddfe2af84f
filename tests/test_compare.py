# SPDX-License-Identifier: MIT
"""Unit tests for API version comparison and sorting."""

import random

import pytest

from kube_apiversion import (
    ApiVersion,
    ApiVersionList,
    Ordering,
    ParseError,
    api_version_key,
    compare_api_versions,
    latest_api_version,
    parse_api_version,
    parse_api_versions,
    sort_api_versions,
)

ORDERED_VERSIONS = [
    "v1alpha1",
    "v1beta1",
    "v1beta2",
    "v1",
    "v2beta1",
    "v2beta2",
    "v4",
    "v5alpha2",
    "v5beta1",
]


class TestCompareApiVersions:
    """Tests for compare_api_versions function."""

    @pytest.mark.parametrize(
        "a,b",
        [
            ("v2", "v1"),
            ("v2", "v1alpha2"),
            ("v2", "v1beta2"),
            ("v1alpha2", "v1alpha1"),
            ("v1beta2", "v1beta1"),
            ("v1beta1", "v1alpha1"),
            ("v1", "v1beta9"),
            ("v1alpha10", "v1alpha9"),
        ],
    )
    def test_greater(self, a: str, b: str):
        """Test pairs where the first version is newer."""
        assert compare_api_versions(a, b) is Ordering.GREATER
        assert compare_api_versions(b, a) is Ordering.LESS

    @pytest.mark.parametrize(
        "a,b",
        [
            ("v1", "v2"),
            ("v1alpha1", "v2"),
            ("v1beta1", "v2"),
            ("v1alpha1", "v1alpha2"),
            ("v1beta1", "v1beta2"),
            ("v1alpha1", "v1beta1"),
        ],
    )
    def test_less(self, a: str, b: str):
        """Test pairs where the first version is older."""
        assert compare_api_versions(a, b) is Ordering.LESS

    @pytest.mark.parametrize("version", ["v1", "v1alpha1", "v1beta1", "v111beta222"])
    def test_equal(self, version: str):
        """Test that a version equals itself."""
        assert compare_api_versions(version, version) is Ordering.EQUAL

    def test_major_dominates_stability(self):
        """Test that a stable v1 is older than an alpha v2."""
        assert compare_api_versions("v1", "v2alpha1") is Ordering.LESS

    def test_ordering_is_int(self):
        """Test that the result can be used as -1/0/1."""
        assert compare_api_versions("v1", "v2") == -1
        assert compare_api_versions("v2", "v2") == 0
        assert compare_api_versions("v2", "v1") == 1

    def test_version_objects(self):
        """Test comparison with ApiVersion objects."""
        v1 = parse_api_version("v1")
        v2 = parse_api_version("v2")
        assert compare_api_versions(v1, v2) is Ordering.LESS

    def test_mixed_string_and_version(self):
        """Test comparison with mixed string and ApiVersion."""
        v = ApiVersion.beta(1, 1)
        assert compare_api_versions(v, "v1") is Ordering.LESS
        assert compare_api_versions("v1beta1", v) is Ordering.EQUAL

    def test_invalid_string(self):
        """Test that invalid strings raise ParseError."""
        with pytest.raises(ParseError):
            compare_api_versions("v1", "1.0.0")


class TestApiVersionKey:
    """Tests for api_version_key function."""

    def test_key_components(self):
        """Test the key tuple."""
        assert api_version_key("v1") == (1, 2, 0)
        assert api_version_key("v3beta4") == (3, 1, 4)
        assert api_version_key("v3alpha4") == (3, 0, 4)

    def test_sorting_strings(self):
        """Test sorting plain strings with the key."""
        versions = ["v2", "v1", "v1beta1", "v1alpha1"]
        assert sorted(versions, key=api_version_key) == ["v1alpha1", "v1beta1", "v1", "v2"]


class TestSortApiVersions:
    """Tests for sort_api_versions function."""

    def test_reference_order(self):
        """Test that the reference list is already sorted."""
        result = sort_api_versions(ORDERED_VERSIONS)
        assert [str(v) for v in result] == ORDERED_VERSIONS

    @pytest.mark.parametrize("seed", range(10))
    def test_shuffled(self, seed: int):
        """Test that any shuffle sorts back to the reference order."""
        shuffled = ORDERED_VERSIONS.copy()
        random.Random(seed).shuffle(shuffled)
        assert [str(v) for v in sort_api_versions(shuffled)] == ORDERED_VERSIONS

    def test_reverse(self):
        """Test sorting newest first."""
        result = sort_api_versions(ORDERED_VERSIONS, reverse=True)
        assert [str(v) for v in result] == ORDERED_VERSIONS[::-1]

    def test_idempotent(self):
        """Test that sorting twice equals sorting once."""
        once = sort_api_versions(["v2", "v1beta1", "v1"])
        assert sort_api_versions(once) == once

    def test_keeps_raw(self):
        """Test that parsed strings keep their raw text."""
        result = sort_api_versions(["v2", "v1"])
        assert [v.raw for v in result] == ["v1", "v2"]

    def test_stable_for_equal_values(self):
        """Test that equal versions keep input order."""
        first = ApiVersion(major=1, raw="first")
        second = ApiVersion(major=1, raw="second")
        result = sort_api_versions([first, second, ApiVersion.alpha(1, 1)])
        assert [v.raw for v in result] == ["v1alpha1", "first", "second"]

    def test_does_not_modify_input(self):
        """Test that the input list is left alone."""
        versions = ["v2", "v1"]
        sort_api_versions(versions)
        assert versions == ["v2", "v1"]

    def test_invalid_raises(self):
        """Test that an invalid entry raises by default."""
        with pytest.raises(ParseError) as exc_info:
            sort_api_versions(["v1", "bogus", "v2"])
        assert exc_info.value.input == "bogus"

    def test_skip_invalid(self):
        """Test dropping invalid entries."""
        result = sort_api_versions(["v2", "bogus", "v1", ""], skip_invalid=True)
        assert [str(v) for v in result] == ["v1", "v2"]

    def test_empty(self):
        """Test sorting nothing."""
        assert sort_api_versions([]) == []


class TestParseApiVersions:
    """Tests for parse_api_versions function."""

    def test_keeps_input_order(self):
        """Test that parsing does not reorder."""
        result = parse_api_versions(["v2", ApiVersion.alpha(1, 1), "v1"])
        assert [str(v) for v in result] == ["v2", "v1alpha1", "v1"]

    def test_invalid_raises(self):
        """Test that an invalid entry raises by default."""
        with pytest.raises(ParseError) as exc_info:
            parse_api_versions(["v1", "v1gamma1"])
        assert exc_info.value.input == "v1gamma1"

    def test_on_skip_called_for_each_dropped_entry(self):
        """Test that on_skip sees every dropped entry, in order."""
        skipped: list[ParseError] = []
        result = parse_api_versions(
            ["bogus", "v1", "", "v2"], skip_invalid=True, on_skip=skipped.append
        )
        assert [str(v) for v in result] == ["v1", "v2"]
        assert [e.input for e in skipped] == ["bogus", ""]

    def test_on_skip_not_called_when_raising(self):
        """Test that on_skip is only used when skipping."""
        skipped: list[ParseError] = []
        with pytest.raises(ParseError):
            parse_api_versions(["bogus"], on_skip=skipped.append)
        assert skipped == []


class TestLatestApiVersion:
    """Tests for latest_api_version function."""

    def test_latest(self):
        """Test picking the newest version."""
        assert str(latest_api_version(ORDERED_VERSIONS)) == "v5beta1"

    def test_latest_stable(self):
        """Test picking the newest stable version."""
        assert str(latest_api_version(ORDERED_VERSIONS, stable_only=True)) == "v4"

    def test_no_stable(self):
        """Test that None is returned when nothing is stable."""
        assert latest_api_version(["v1alpha1", "v1beta1"], stable_only=True) is None

    def test_empty(self):
        """Test that None is returned for no input."""
        assert latest_api_version([]) is None

    def test_skip_invalid(self):
        """Test dropping invalid entries."""
        assert str(latest_api_version(["v1", "v9.0"], skip_invalid=True)) == "v1"
        with pytest.raises(ParseError):
            latest_api_version(["v1", "v9.0"])


class TestApiVersionList:
    """Tests for ApiVersionList."""

    def test_sort_in_place(self):
        """Test that sort() uses API version order."""
        subject = ApiVersionList.from_strings(ORDERED_VERSIONS)
        random.Random(42).shuffle(subject)
        subject.sort()
        assert [str(v) for v in subject] == ORDERED_VERSIONS

    def test_sort_reverse(self):
        """Test sorting in place newest first."""
        subject = ApiVersionList.from_strings(["v1", "v2", "v1beta1"])
        subject.sort(reverse=True)
        assert [str(v) for v in subject] == ["v2", "v1", "v1beta1"]

    def test_from_strings_skip_invalid(self):
        """Test building a list while dropping invalid entries."""
        subject = ApiVersionList.from_strings(["v1", "nope"], skip_invalid=True)
        assert subject == [ApiVersion.stable(1)]

    def test_from_strings_invalid(self):
        """Test that invalid entries raise by default."""
        with pytest.raises(ParseError):
            ApiVersionList.from_strings(["v1", "nope"])

    def test_latest(self):
        """Test the latest helpers."""
        subject = ApiVersionList.from_strings(["v1", "v2beta1", "v1beta3"])
        assert str(subject.latest()) == "v2beta1"
        assert str(subject.latest_stable()) == "v1"
        assert ApiVersionList().latest() is None
