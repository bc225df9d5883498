"""Tests for content kinds and extension handling."""

import pytest

from safefs.models.content import (
    ContentKind,
    UnrecognizedExtensionError,
    extension_for_kind,
    kind_for_extension,
    with_extension,
)


@pytest.mark.parametrize(
    "kind, ext",
    [
        (ContentKind.TEXT, ".txt"),
        (ContentKind.JSON, ".json"),
        (ContentKind.JSON_OBJECT, ".json"),
        (ContentKind.LOG, ".log"),
        (ContentKind.OTHER, ""),
    ],
)
def test_extension_for_kind(kind, ext):
    assert extension_for_kind(kind) == ext
    assert extension_for_kind(kind, omit_dot=True) == ext.lstrip(".")


def test_kind_for_extension():
    assert kind_for_extension("txt") == ContentKind.TEXT
    assert kind_for_extension("json") == ContentKind.JSON
    assert kind_for_extension(".log") == ContentKind.LOG


@pytest.mark.parametrize("ext", ["md", "", "jpeg"])
def test_kind_for_unknown_extension_raises(ext):
    with pytest.raises(UnrecognizedExtensionError, match="Unknown extension"):
        kind_for_extension(ext)


def test_with_extension_is_idempotent():
    assert with_extension("a", ".json") == "a.json"
    assert with_extension("a.json", ".json") == "a.json"
    assert with_extension(with_extension("a", ".json"), ".json") == "a.json"
    assert with_extension("notes.txt", ".json") == "notes.txt.json"
    assert with_extension("raw", "") == "raw"
