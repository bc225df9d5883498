"""Tests for TypedFileManager."""

import pytest

from safefs.models.content import ContentKind, UnrecognizedExtensionError
from safefs.models.result import StatusCode
from safefs.services.typed_files import TypedFileManager


@pytest.fixture
def manager(local_backend):
    return TypedFileManager("widgets", file_stub="settings", backend=local_backend)


@pytest.mark.asyncio
async def test_json_object_round_trip(manager):
    manager.write({"a": 1}, "rec", ContentKind.JSON)

    resp = await manager.read("rec", ContentKind.JSON_OBJECT)

    assert resp.status == StatusCode.OK
    assert resp.payload == {"a": 1}


def test_extension_is_not_doubled(manager, documents_dir):
    manager.write({"a": 1}, "rec", ContentKind.JSON)
    manager.write({"a": 2}, "rec.json", ContentKind.JSON)

    assert manager.list_contents() == ["rec.json"]
    assert manager.path_for("rec.json", ContentKind.JSON) == manager.path_for("rec", ContentKind.JSON)


@pytest.mark.asyncio
@pytest.mark.parametrize("kind", list(ContentKind))
async def test_missing_file_is_not_found_for_every_kind(manager, kind):
    resp = await manager.read("missing", kind)
    assert resp.status == StatusCode.NOT_FOUND
    assert resp.payload is None


@pytest.mark.asyncio
async def test_array_under_json_object_is_error(manager):
    manager.files.write_text("list.json", "[1,2,3]")

    resp = await manager.read("list", ContentKind.JSON_OBJECT)
    assert resp.status == StatusCode.ERROR
    assert resp.is_empty()

    any_shape = await manager.read("list", ContentKind.JSON)
    assert any_shape.payload == [1, 2, 3]


@pytest.mark.asyncio
async def test_text_and_log_reads_are_verbatim(manager):
    manager.write("hello", "greeting")
    manager.write("line 1\nline 2\n", "run", ContentKind.LOG)

    assert (await manager.read("greeting")).payload == "hello"
    assert (await manager.read("greeting.txt", ContentKind.TEXT)).payload == "hello"
    assert (await manager.read("run", ContentKind.LOG)).payload == "line 1\nline 2\n"


@pytest.mark.asyncio
async def test_write_uses_default_file_stub(manager):
    manager.write({"theme": "dark"}, kind=ContentKind.JSON)
    assert manager.exists("settings.json")

    resp = await manager.read("settings", ContentKind.JSON_OBJECT)
    assert resp.payload == {"theme": "dark"}


def test_write_without_name_or_stub_raises(local_backend):
    manager = TypedFileManager("widgets", backend=local_backend)
    with pytest.raises(ValueError):
        manager.write("content")


@pytest.mark.asyncio
async def test_in_config_root_false_uses_documents_dir(manager, documents_dir):
    manager.write("shared", "common", in_config_root=False)
    assert (documents_dir / "common.txt").read_text() == "shared"

    assert (await manager.read("common", in_config_root=False)).payload == "shared"
    assert (await manager.read("common")).status == StatusCode.NOT_FOUND


def test_copy_remove_and_dates(manager):
    manager.write("v1", "draft")
    manager.copy("draft.txt", "backup.txt")
    assert manager.list_contents() == ["backup.txt", "draft.txt"]
    assert manager.modification_date("backup.txt") is not None

    manager.remove("draft.txt")
    assert not manager.exists("draft.txt")


def test_extension_lookups():
    assert TypedFileManager.extension_for_kind(ContentKind.JSON_OBJECT) == ".json"
    assert TypedFileManager.extension_for_kind(ContentKind.LOG, omit_dot=True) == "log"
    assert TypedFileManager.kind_for_extension("txt") == ContentKind.TEXT

    with pytest.raises(UnrecognizedExtensionError):
        TypedFileManager.kind_for_extension("csv")


@pytest.mark.asyncio
async def test_cloud_file_is_downloaded_before_read(cloud_backend):
    cloud_backend.read_text.return_value = '{"synced": true}'
    manager = TypedFileManager("widgets", backend=cloud_backend)

    resp = await manager.read("state", ContentKind.JSON_OBJECT)

    assert resp.payload == {"synced": True}
    cloud_backend.download.assert_awaited_once()
    downloaded = cloud_backend.download.await_args.args[0]
    assert downloaded.name == "state.json"


@pytest.mark.asyncio
async def test_accessor_can_be_shared(accessor):
    accessor.write_text("shared.txt", "same root")
    manager = TypedFileManager("config", accessor=accessor)

    assert manager.files is accessor
    assert (await manager.read("shared")).payload == "same root"


@pytest.mark.asyncio
async def test_read_does_not_raise_on_backend_errors(cloud_backend):
    cloud_backend.is_downloaded.return_value = True
    cloud_backend.read_text.side_effect = PermissionError("denied")
    manager = TypedFileManager("widgets", backend=cloud_backend)

    resp = await manager.read("secret")
    assert resp.status == StatusCode.ERROR
