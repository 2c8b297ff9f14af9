import asyncio
import random
import re

import httpx
from conftest import json_of

from afaq_portal.upload import (
    FileUploader,
    LocalFile,
    UploadBackend,
    generate_object_name,
)

CONFIGURED = {"configured": True, "endpoint": "https://s3.example.test", "bucket": "afaq", "credentials": "set"}


def _files(count: int) -> list[LocalFile]:
    return [LocalFile(f"slide-{n}.png", b"x" * (n + 1), "image/png") for n in range(1, count + 1)]


def _stored(name: str, ok: bool = True) -> dict:
    if not ok:
        return {"ok": False, "originalName": name, "error": "Rejected"}
    return {
        "ok": True,
        "originalName": name,
        "url": f"https://s3.example.test/afaq/{name}",
        "size": 10,
        "type": "image/png",
    }


def test_generate_object_name() -> None:
    name = generate_object_name(now_ms=1700000000000, rng=random.Random(1))
    assert re.fullmatch(r"file-1700000000000-[0-9a-z]{9}", name)
    assert generate_object_name() != generate_object_name()


def test_local_file_from_path(tmp_path) -> None:
    path = tmp_path / "notes.pdf"
    path.write_bytes(b"%PDF-1.4")
    local = LocalFile.from_path(path)
    assert local.name == "notes.pdf"
    assert local.size == 8
    assert local.content_type == "application/pdf"


def test_single_external_upload_uses_file_field_and_folder(portal) -> None:
    portal.signed_in()
    portal.on("GET", "/api/upload-status", json_body=CONFIGURED)
    portal.on("POST", "/api/upload", json_body=_stored("slide-1.png"))

    async def scenario():
        ctx = portal.context()
        uploader = FileUploader(ctx, folder="lesson-plans")
        outcome = await uploader.upload(_files(1), UploadBackend.EXTERNAL)
        await ctx.aclose()
        return outcome, uploader

    outcome, uploader = asyncio.run(scenario())

    assert outcome.ok is True
    assert outcome.message == "File uploaded to external storage"
    assert [f.url for f in uploader.uploaded] == ["https://s3.example.test/afaq/slide-1.png"]
    assert uploader.uploaded[0].method == "external"

    [request] = portal.calls("/api/upload", "POST")
    body = request.content
    assert b'name="file"; filename="slide-1.png"' in body
    assert b'name="folder"' in body
    assert b"lesson-plans" in body
    assert portal.calls("/api/upload-multiple") == []


def test_multiple_external_upload_uses_files_field(portal) -> None:
    portal.on("GET", "/api/upload-status", json_body=CONFIGURED)
    names = [f.name for f in _files(3)]
    portal.on(
        "POST",
        "/api/upload-multiple",
        json_body={"ok": True, "successful": 3, "results": [_stored(n) for n in names]},
    )

    async def scenario():
        ctx = portal.context()
        outcome = await FileUploader(ctx).upload(_files(3), "external")
        await ctx.aclose()
        return outcome

    outcome = asyncio.run(scenario())

    assert outcome.ok is True
    assert outcome.message == "3 files uploaded successfully"
    [request] = portal.calls("/api/upload-multiple", "POST")
    assert request.content.count(b'name="files"') == 3
    assert b"uploads" in request.content
    assert portal.calls("/api/upload") == []


def test_partial_failure_reports_successful_count(portal) -> None:
    portal.on("GET", "/api/upload-status", json_body=CONFIGURED)
    portal.on(
        "POST",
        "/api/upload-multiple",
        json_body={
            "ok": False,
            "successful": 2,
            "results": [_stored("slide-1.png"), _stored("slide-2.png", ok=False), _stored("slide-3.png")],
        },
    )

    async def scenario():
        ctx = portal.context()
        uploader = FileUploader(ctx)
        outcome = await uploader.upload(_files(3), UploadBackend.EXTERNAL)
        toasts = list(ctx.toaster.toasts)
        await ctx.aclose()
        return outcome, uploader, toasts

    outcome, uploader, toasts = asyncio.run(scenario())

    assert outcome.ok is True
    assert outcome.message == "2 files uploaded successfully"
    assert [f.name for f in uploader.uploaded] == ["slide-1.png", "slide-3.png"]
    assert toasts[-1].title == "Upload Successful"


def test_external_upload_disabled_when_not_configured(portal) -> None:
    portal.on("GET", "/api/upload-status", json_body={"configured": False})

    async def scenario():
        ctx = portal.context()
        uploader = FileUploader(ctx)
        outcome = await uploader.upload(_files(2), UploadBackend.EXTERNAL)
        await ctx.aclose()
        return outcome, uploader

    outcome, uploader = asyncio.run(scenario())

    assert outcome.ok is False
    assert outcome.message == uploader.disabled_reason
    assert uploader.external_available is False
    assert portal.paths() == ["/api/upload-status"]


def test_platform_upload_puts_to_signed_url(portal) -> None:
    portal.on(
        "POST",
        "/api/uploads/public",
        json_body={"uploadURL": "https://storage.test/bucket/signed-object?sig=abc"},
    )
    portal.on("PUT", "/bucket/signed-object", status=200, text="")

    async def scenario():
        ctx = portal.context()
        uploader = FileUploader(ctx)
        outcome = await uploader.upload(_files(1))
        await ctx.aclose()
        return outcome, uploader

    outcome, uploader = asyncio.run(scenario())

    assert outcome.ok is True
    assert outcome.message == "Files uploaded to platform storage"
    [target_request] = portal.calls("/api/uploads/public", "POST")
    object_name = json_of(target_request)["fileName"]
    assert object_name.startswith("file-")

    [put] = portal.calls("/bucket/signed-object", "PUT")
    assert put.headers["Content-Type"] == "image/png"
    assert put.content == b"xx"
    assert "cookie" not in put.headers

    [uploaded] = uploader.uploaded
    assert uploaded.url == f"/public-objects/{object_name}"
    assert uploaded.method == "platform"


def test_platform_batch_skips_failed_files(portal) -> None:
    counter = {"value": 0}

    def target(request: httpx.Request) -> httpx.Response:
        counter["value"] += 1
        return httpx.Response(200, json={"uploadURL": f"https://storage.test/bucket/{counter['value']}"})

    def put(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="Forbidden")

    portal.on("POST", "/api/uploads/public", handler=target)
    portal.on("PUT", "/bucket/1", status=200, text="")
    portal.on("PUT", "/bucket/2", handler=put)
    portal.on("PUT", "/bucket/3", status=200, text="")

    async def scenario():
        ctx = portal.context()
        outcome = await FileUploader(ctx).upload(_files(3))
        await ctx.aclose()
        return outcome

    outcome = asyncio.run(scenario())
    assert outcome.ok is True
    assert outcome.message == "2 files uploaded successfully"
    assert len(outcome.files) == 2


def test_failed_upload_shows_failure_toast(portal) -> None:
    portal.on("POST", "/api/uploads/public", status=500, text="Internal Server Error")

    async def scenario():
        ctx = portal.context()
        outcome = await FileUploader(ctx).upload(_files(1))
        await ctx.aclose()
        return outcome

    outcome = asyncio.run(scenario())
    assert outcome.ok is False
    assert outcome.toast.title == "Upload Failed"
    assert outcome.toast.variant == "destructive"


def test_unauthorized_upload_redirects_to_login(portal) -> None:
    portal.on("POST", "/api/uploads/public", status=401, text="Unauthorized")

    async def scenario():
        ctx = portal.context()
        outcome = await FileUploader(ctx).upload(_files(1))
        pending = ctx.navigator.pending_url
        await ctx.aclose()
        return outcome, pending

    outcome, pending = asyncio.run(scenario())
    assert outcome.ok is False
    assert pending == "https://afaq.test/api/login"


def test_empty_selection(portal) -> None:
    async def scenario():
        ctx = portal.context()
        outcome = await FileUploader(ctx).upload([])
        await ctx.aclose()
        return outcome

    outcome = asyncio.run(scenario())
    assert outcome.ok is False
    assert outcome.toast.title == "No Files Selected"
    assert portal.requests == []
