"""Tests for devscope.config.validation."""

from __future__ import annotations

from devscope.config.validation import validate_config


def _keys(warnings):
    return [w.key for w in warnings]


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_config(self) -> None:
        data = {
            "cache": {"ttl": {"projects": 120, "git": 30}},
            "scan": {"exclude": ["archive/"], "max_workers": 4},
            "git": {"timeout": 5},
            "storage": {"database": "/tmp/devscope.db"},
        }

        assert validate_config(data, source="test") == []

    def test_unknown_top_level_key_with_suggestion(self) -> None:
        warnings = validate_config({"scna": {}}, source="test")

        assert _keys(warnings) == ["scna"]
        assert warnings[0].suggestion == "scan"

    def test_unknown_section_key(self) -> None:
        warnings = validate_config({"git": {"timeuot": 5}}, source="test")

        assert _keys(warnings) == ["git.timeuot"]
        assert warnings[0].suggestion == "timeout"

    def test_section_must_be_mapping(self) -> None:
        warnings = validate_config({"scan": ["a"]}, source="test")

        assert _keys(warnings) == ["scan"]

    def test_unknown_cache_kind(self) -> None:
        warnings = validate_config({"cache": {"ttl": {"projcts": 10}}}, source="test")

        assert _keys(warnings) == ["cache.ttl.projcts"]
        assert warnings[0].suggestion == "projects"

    def test_negative_ttl(self) -> None:
        warnings = validate_config({"cache": {"ttl": {"git": -5}}}, source="test")

        assert _keys(warnings) == ["cache.ttl.git"]

    def test_bad_types(self) -> None:
        warnings = validate_config(
            {
                "scan": {"exclude": "archive/", "max_workers": 0},
                "git": {"timeout": "fast"},
                "storage": {"database": 5},
            },
            source="test",
        )

        assert sorted(_keys(warnings)) == [
            "git.timeout",
            "scan.exclude",
            "scan.max_workers",
            "storage.database",
        ]

    def test_not_a_mapping(self) -> None:
        warnings = validate_config(["a"], source="test")  # type: ignore[arg-type]

        assert len(warnings) == 1
        assert warnings[0].key is None
