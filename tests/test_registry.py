import json

import pytest

from pathgroups.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    NotFoundError,
    UnknownGroupError,
)
from pathgroups.registry import PathEntry


def test_load_missing_file_is_empty(registry):
    assert registry.load() == {}


def test_load_missing_file_strict_raises(registry, config_file):
    with pytest.raises(ConfigNotFoundError) as exc:
        registry.load(strict=True)
    assert exc.value.path == config_file
    assert NotFoundError is ConfigNotFoundError


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"C:\\\\a": 3}'])
@pytest.mark.parametrize("strict", [False, True])
def test_load_malformed_raises(registry, config_file, content, strict):
    config_file.parent.mkdir(parents=True)
    config_file.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigParseError):
        registry.load(strict=strict)


def test_save_creates_parent_dirs_and_leaves_no_temp_files(registry, config_file):
    registry.save({r"C:\dev": "dev"})
    assert json.loads(config_file.read_text(encoding="utf-8")) == {r"C:\dev": "dev"}
    assert [p.name for p in config_file.parent.iterdir()] == [config_file.name]


def test_save_overwrites_whole_file(registry):
    registry.save({r"C:\a": "one", r"C:\b": "two"})
    registry.save({r"C:\c": "three"})
    assert registry.load() == {r"C:\c": "three"}


def test_upsert_normalizes_and_last_write_wins(registry):
    assert registry.upsert("c:/dev/forward/slash", "dev") == r"c:\dev\forward\slash"
    registry.upsert("c:/dev/forward/slash", "tools")
    assert registry.load() == {r"c:\dev\forward\slash": "tools"}


def test_upsert_replaces_case_variant_on_windows(registry):
    registry.upsert(r"C:\Dev", "dev")
    registry.upsert(r"c:\dev", "other")
    assert registry.load() == {r"c:\dev": "other"}


def test_groups_of(registry):
    mapping = {r"c:\dev": "dev", r"c:\dev\tools": "dev", r"c:\python39": "python"}
    assert registry.groups_of(mapping) == set(mapping)
    assert registry.groups_of(mapping, []) == set(mapping)
    assert registry.groups_of(mapping, ["dev"]) == {r"c:\dev", r"c:\dev\tools"}
    assert registry.groups_of(mapping, ["dev", "python"]) == set(mapping)


def test_groups_of_collects_all_unknown_groups(registry):
    mapping = {r"c:\dev": "dev"}
    with pytest.raises(UnknownGroupError) as exc:
        registry.groups_of(mapping, ["nope", "dev", "missing"])
    assert exc.value.groups == ("nope", "missing")
    assert "'nope'" in str(exc.value) and "'missing'" in str(exc.value)


def test_remove(registry):
    registry.upsert(r"C:\a", "one")
    registry.upsert(r"C:\b", "one")
    assert registry.remove("c:/A") is True
    assert registry.load() == {r"C:\b": "one"}
    assert registry.remove(r"C:\zzz") is False


def test_entries_sorted_by_group_then_path(registry):
    mapping = {r"c:\z": "a", r"c:\b": "b", r"c:\a": "b"}
    assert registry.entries(mapping) == [
        PathEntry(r"c:\z", "a"),
        PathEntry(r"c:\a", "b"),
        PathEntry(r"c:\b", "b"),
    ]


@pytest.mark.parametrize("strict", [False, True])
def test_load_invalid_utf8_raises_parse_error(registry, config_file, strict):
    config_file.parent.mkdir(parents=True)
    config_file.write_bytes(b'{"c:\\\\dev": "d\xff"}')
    with pytest.raises(ConfigParseError):
        registry.load(strict=strict)


def test_load_unreadable_path_raises_read_error(registry, config_file):
    config_file.mkdir(parents=True)
    with pytest.raises(ConfigReadError) as exc:
        registry.load()
    assert exc.value.path == config_file


def test_failed_save_leaves_no_temp_file(registry, config_file):
    config_file.mkdir(parents=True)
    with pytest.raises(ConfigWriteError):
        registry.save({r"c:\a": "b"})
    assert [p.name for p in config_file.parent.iterdir()] == [config_file.name]
