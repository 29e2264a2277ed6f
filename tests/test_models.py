"""
Tests for the domain models.
"""

import json

import pytest
from pydantic import ValidationError

from isomap.domain.models import (
    DEFAULT_OUTPUT,
    DEFAULT_VERSION_KEYS,
    NULL_SENTINEL,
    FailureReason,
    IsoMap,
    ResolutionResult,
    RunOptions,
)


class TestRunOptions:
    """Tests for RunOptions model."""

    def test_defaults(self):
        """No arguments gives the default output and the four default keys."""
        options = RunOptions()
        assert options.output_path == DEFAULT_OUTPUT
        assert options.keep_intermediate is False
        assert options.debug is False
        assert options.version_keys == ["11", "11l", "10", "10l"]

    def test_empty_keys_fall_back_to_defaults(self):
        """An explicitly empty key list is replaced by the defaults."""
        options = RunOptions(version_keys=[])
        assert options.version_keys == list(DEFAULT_VERSION_KEYS)

    def test_custom_keys_keep_order_and_duplicates(self):
        """Custom keys are passed through untouched."""
        options = RunOptions(version_keys=["10", "11", "10", "bogus"])
        assert options.version_keys == ["10", "11", "10", "bogus"]

    def test_empty_output_path_rejected(self):
        """Output path must not be empty."""
        with pytest.raises(ValidationError):
            RunOptions(output_path="")

    def test_options_are_frozen(self):
        """Options cannot be changed after parsing."""
        options = RunOptions()
        with pytest.raises(ValidationError):
            options.debug = True


class TestResolutionResult:
    """Tests for ResolutionResult."""

    def test_success(self):
        """A URL makes the result ok and becomes the written value."""
        result = ResolutionResult.success("11", "https://example.com/win11.iso")
        assert result.ok
        assert result.value == "https://example.com/win11.iso"
        assert result.reason is None

    def test_failure_writes_sentinel(self):
        """Any failure is written as the null sentinel."""
        for reason in FailureReason:
            result = ResolutionResult.failure("11", reason, "detail")
            assert not result.ok
            assert result.value == NULL_SENTINEL
            assert result.reason == reason

    def test_empty_url_is_not_ok(self):
        """An empty URL counts as a failure."""
        result = ResolutionResult(key="10", url="")
        assert not result.ok
        assert result.value == "null"


class TestIsoMap:
    """Tests for IsoMap rendering."""

    def test_renders_in_insertion_order(self):
        """Entries are rendered in the order they were added."""
        iso_map = IsoMap()
        iso_map.add(ResolutionResult.success("11", "https://example.com/11.iso"))
        iso_map.add(ResolutionResult.failure("11l", FailureReason.TIMEOUT))
        iso_map.add(ResolutionResult.success("10", "https://example.com/10.iso"))

        text = iso_map.to_json()
        assert text == (
            "{\n"
            '  "11": "https://example.com/11.iso",\n'
            '  "11l": "null",\n'
            '  "10": "https://example.com/10.iso"\n'
            "}\n"
        )
        assert list(json.loads(text)) == ["11", "11l", "10"]

    def test_duplicates_are_kept(self):
        """The same key requested twice appears twice."""
        iso_map = IsoMap()
        iso_map.add(ResolutionResult.success("10", "https://example.com/a.iso"))
        iso_map.add(ResolutionResult.failure("10", FailureReason.ERROR))

        assert len(iso_map) == 2
        assert iso_map.entries == [("10", "https://example.com/a.iso"), ("10", "null")]
        assert iso_map.to_json().count('"10":') == 2

    def test_values_are_json_escaped(self):
        """Quotes in keys or URLs still produce valid JSON."""
        iso_map = IsoMap()
        iso_map.add(ResolutionResult.success('we"ird', 'https://example.com/?q="x"'))

        parsed = json.loads(iso_map.to_json())
        assert parsed == {'we"ird': 'https://example.com/?q="x"'}

    def test_empty_map(self):
        """An empty map is still a valid JSON object."""
        assert json.loads(IsoMap().to_json()) == {}
