"""Shared fixtures for dc_download tests."""

import pytest

from dc_download.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DIGITAL_COLLECTIONS_TOKEN", "HTTPS_PROXY", "HTTP_PROXY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path):
    """Config with a token, no progress bar and no retry delays."""
    return Config(
        token="secret-token",
        output_dir=str(tmp_path / "out"),
        show_progress=False,
        max_retries=2,
        retry_wait_min=0,
        retry_wait_max=0,
    )
