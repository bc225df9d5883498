"""Content kinds and their canonical file extensions."""

from enum import Enum


class ContentKind(str, Enum):
    TEXT = "txt"
    JSON = "json"
    JSON_OBJECT = "json_object"
    OTHER = ""
    LOG = "log"


class UnrecognizedExtensionError(ValueError):
    pass


_EXTENSIONS: dict[ContentKind, str] = {
    ContentKind.TEXT: "txt",
    ContentKind.JSON: "json",
    ContentKind.JSON_OBJECT: "json",
    ContentKind.LOG: "log",
    ContentKind.OTHER: "",
}

# JSON_OBJECT shares ".json" with JSON; the lookup resolves to the general kind
_KINDS: dict[str, ContentKind] = {
    "txt": ContentKind.TEXT,
    "json": ContentKind.JSON,
    "log": ContentKind.LOG,
}


def extension_for_kind(kind: ContentKind, omit_dot: bool = False) -> str:
    """Canonical extension for ``kind`` (".txt", ".json", ".log" or "" for OTHER)."""
    ext = _EXTENSIONS.get(ContentKind(kind), "")
    if not ext or omit_dot:
        return ext
    return f".{ext}"


def kind_for_extension(extension: str) -> ContentKind:
    """Inverse of extension_for_kind. Raises UnrecognizedExtensionError for unmapped extensions."""
    key = extension.lower().lstrip(".")
    try:
        return _KINDS[key]
    except KeyError:
        raise UnrecognizedExtensionError(f"Unknown extension {extension}.") from None


def with_extension(name: str, extension: str) -> str:
    """Append ``extension`` to ``name`` unless it already ends with it."""
    if not extension or name.endswith(extension):
        return name
    return name + extension
