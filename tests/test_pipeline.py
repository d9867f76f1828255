"""Tests for URL/destination derivation and the full download run."""

import logging
from pathlib import Path

import httpx
import pytest
from respx import MockRouter

from dc_download.exceptions import CaptureError, ConfigurationError
from dc_download.models.capture import Capture
from dc_download.models.options import get_filename_field, get_size
from dc_download.pipeline import build_task, download_item, image_url
from tests.helpers import API_URL, ITEM_UUID, api_body, capture_record

ITEM_URL = f"{API_URL}/items/{ITEM_UUID}"


@pytest.fixture
def capture():
    return Capture.from_dict(capture_record("cap-uuid", "5039117", 12))


def test_image_url():
    assert image_url("5039117", "w") == "http://images.nypl.org/index.php?id=5039117&t=w"


@pytest.mark.parametrize(
    "size_code, field_name, expected_url, expected_name",
    [
        ("q", "uuid", "http://images.nypl.org/index.php?id=5039117&t=q", "cap-uuid.jpeg"),
        ("t", "image", "http://images.nypl.org/index.php?id=5039117&t=t", "5039117.gif"),
        ("b", "page", "http://images.nypl.org/index.php?id=5039117&t=b", "12.jpeg"),
        ("g", "image", "http://images.nypl.org/index.php?id=5039117&t=g", "5039117.jpeg"),
        ("T", "page", "http://lcweb2.example.org/master/5039117u.tif", "12.tiff"),
        ("T", "uuid", "http://lcweb2.example.org/master/5039117u.tif", "cap-uuid.tiff"),
    ],
)
def test_build_task(capture, tmp_path, size_code, field_name, expected_url, expected_name):
    task = build_task(capture, get_size(size_code), get_filename_field(field_name), tmp_path)

    assert task.url == expected_url
    assert task.save_path == tmp_path / expected_name
    assert task.capture_uuid == "cap-uuid"


def test_build_task_size_not_available(tmp_path):
    capture = Capture.from_dict(capture_record("cap-uuid", "1", 1, sizes="bftrw"))

    with pytest.raises(CaptureError, match="Image size 'q' not available for this capture: cap-uuid"):
        build_task(capture, get_size("q"), get_filename_field("uuid"), tmp_path)


def test_build_task_tiff_not_available(tmp_path):
    capture = Capture.from_dict(capture_record("cap-uuid", "1", 1, high_res=False))

    with pytest.raises(CaptureError, match="TIFF not available for this capture: cap-uuid"):
        build_task(capture, get_size("T"), get_filename_field("uuid"), tmp_path)


def test_build_task_tiff_ignores_image_links(tmp_path):
    capture = Capture.from_dict(capture_record("cap-uuid", "1", 1, sizes=""))

    task = build_task(capture, get_size("T"), get_filename_field("image"), tmp_path)

    assert task.save_path == tmp_path / "1.tiff"


@pytest.mark.asyncio
async def test_download_item(config, respx_mock: MockRouter):
    records = [capture_record("cap-1", "101", 1), capture_record("cap-2", "102", 2)]
    respx_mock.get(ITEM_URL).mock(return_value=httpx.Response(200, json=api_body(records)))
    respx_mock.get("http://images.nypl.org/index.php?id=101&t=w").mock(
        return_value=httpx.Response(200, content=b"one")
    )
    respx_mock.get("http://images.nypl.org/index.php?id=102&t=w").mock(
        return_value=httpx.Response(200, content=b"two")
    )
    config.size = "w"
    config.filename = "page"

    result = await download_item(config, ITEM_UUID)

    out = Path(config.output_dir)
    assert (out / "1.jpeg").read_bytes() == b"one"
    assert (out / "2.jpeg").read_bytes() == b"two"
    assert result.downloaded == 2
    assert result.skipped == 0
    assert result.total == 2
    assert result.save_path == out


@pytest.mark.asyncio
async def test_download_item_aborts_on_unavailable_size(config, respx_mock: MockRouter):
    records = [
        capture_record("cap-1", "101", 1),
        capture_record("cap-2", "102", 2, sizes="bf"),
        capture_record("cap-3", "103", 3),
    ]
    respx_mock.get(ITEM_URL).mock(return_value=httpx.Response(200, json=api_body(records)))
    respx_mock.get("http://images.nypl.org/index.php?id=101&t=q").mock(
        return_value=httpx.Response(200, content=b"one")
    )

    with pytest.raises(CaptureError, match="cap-2"):
        await download_item(config, ITEM_UUID)

    assert sorted(p.name for p in Path(config.output_dir).iterdir()) == ["cap-1.jpeg"]


@pytest.mark.asyncio
async def test_download_item_skips_existing(config, respx_mock: MockRouter):
    records = [capture_record("cap-1", "101", 1)]
    respx_mock.get(ITEM_URL).mock(return_value=httpx.Response(200, json=api_body(records)))
    out = Path(config.output_dir)
    out.mkdir(parents=True)
    (out / "cap-1.jpeg").write_bytes(b"already here")

    result = await download_item(config, ITEM_UUID)

    assert result.downloaded == 0
    assert result.skipped == 1


@pytest.mark.asyncio
async def test_download_item_invalid_config(config, respx_mock: MockRouter):
    config.size = "z"

    with pytest.raises(ConfigurationError):
        await download_item(config, ITEM_UUID)

    assert len(respx_mock.calls) == 0


@pytest.mark.asyncio
async def test_download_item_logs_progress_counter(config, respx_mock: MockRouter, caplog):
    records = [capture_record("cap-1", "101", 1), capture_record("cap-2", "102", 2)]
    respx_mock.get(ITEM_URL).mock(return_value=httpx.Response(200, json=api_body(records)))
    respx_mock.get(url__startswith="http://images.nypl.org/index.php").mock(
        return_value=httpx.Response(200, content=b"image")
    )
    caplog.set_level(logging.INFO, logger="dc_download.pipeline")

    await download_item(config, ITEM_UUID)

    progress = [
        r.getMessage() for r in caplog.records
        if r.name == "dc_download.pipeline" and r.getMessage().startswith("Downloading image")
    ]
    assert progress == ["Downloading image 1", "Downloading image 2"]
