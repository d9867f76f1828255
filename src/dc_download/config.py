"""Configuration management for dc_download."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dc_download.exceptions import ConfigurationError
from dc_download.models.options import (
    default_filename_field,
    default_size,
    get_filename_field,
    get_size,
)

TOKEN_ENV_VAR = "DIGITAL_COLLECTIONS_TOKEN"


@dataclass
class Config:
    """Configuration for the Digital Collections downloader.

    Holds the requested image size and naming scheme, the API credentials
    and the HTTP settings used for both the catalog query and the image
    downloads.
    """

    # What to download
    token: Optional[str] = None
    size: str = default_size().code
    filename: str = default_filename_field().name
    output_dir: str = "./"

    # Catalog API
    api_url: str = "https://api.repo.nypl.org/api/v1"
    per_page: int = 500

    # HTTP settings
    timeout: int = 60  # seconds
    user_agent: str = "dc-download (+https://github.com/nypl-spacetime/dc-download)"
    proxy: Optional[str] = None

    # Retry settings (using tenacity)
    max_retries: int = 3
    retry_wait_min: float = 1.0
    retry_wait_max: float = 10.0
    retry_multiplier: float = 2.0

    # Download settings
    overwrite: bool = False  # Re-download files that already exist
    show_progress: bool = True

    def __post_init__(self):
        """Fill in values that may come from the environment."""
        if not self.token:
            self.token = os.environ.get(TOKEN_ENV_VAR) or None

        if not self.proxy:
            self.proxy = os.environ.get('HTTPS_PROXY') or os.environ.get('HTTP_PROXY')

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def validate(self) -> List[str]:
        """Check the user-supplied options.

        Returns:
            List of human-readable error messages, empty when valid
        """
        errors = []

        if get_size(self.size) is None:
            errors.append("Image size invalid")

        if get_filename_field(self.filename) is None:
            errors.append("Filename field invalid")

        if not self.token:
            errors.append("Digital Collections API access token not set")

        return errors

    def check(self) -> None:
        """Raise ConfigurationError if validate() reports any problem."""
        errors = self.validate()
        if errors:
            raise ConfigurationError(errors)
