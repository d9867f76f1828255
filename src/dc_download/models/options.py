"""Image sizes and filename fields offered by the downloader.

The size codes are the ones understood by the NYPL image server
(``images.nypl.org``). Sizes flagged ``public_domain_only`` are only served
for public domain assets.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ImageSize:
    """A single-character size/type code and the file it produces."""

    code: str
    description: str
    extension: str
    public_domain_only: bool = False
    default: bool = False


@dataclass(frozen=True)
class FilenameField:
    """A capture field that can be used to name downloaded files."""

    name: str
    description: str
    default: bool = False


SIZES: List[ImageSize] = [
    ImageSize('b', 'center cropped thumbnail .jpeg (100x100 pixels)', 'jpeg'),
    ImageSize('f', 'cropped .jpeg (140 pixels tall with variable width)', 'jpeg'),
    ImageSize('t', 'cropped .gif (150 pixels on the long side)', 'gif'),
    ImageSize('r', 'cropped .jpeg (300 pixels on the long side)', 'jpeg'),
    ImageSize('w', 'cropped .jpeg (760 pixels on the long side)', 'jpeg'),
    ImageSize('q', 'cropped .jpeg (1600 pixels on the long side)', 'jpeg',
              public_domain_only=True, default=True),
    ImageSize('v', 'cropped .jpeg (2560 pixels on the long side)', 'jpeg',
              public_domain_only=True),
    ImageSize('g', 'full-size .jpeg', 'jpeg', public_domain_only=True),
    ImageSize('T', 'full-size .tiff', 'tiff', public_domain_only=True),
]

FILENAME_FIELDS: List[FilenameField] = [
    FilenameField('image', 'uses the image ID as filename (example: "<imageId>.jpeg")'),
    FilenameField('uuid', 'uses the UUID as filename (example: "<uuid>.jpeg")', default=True),
    FilenameField('page', 'uses the page number as filename (example: "<page>.jpeg")'),
]

# Full-size TIFFs are not served by the image server; they come from the
# capture's high resolution link instead.
TIFF_CODE = 'T'


def get_size(code: str) -> Optional[ImageSize]:
    """Look up a size by its (case-sensitive) code."""
    for size in SIZES:
        if size.code == code:
            return size
    return None


def get_filename_field(name: str) -> Optional[FilenameField]:
    """Look up a filename field by name."""
    for field in FILENAME_FIELDS:
        if field.name == name:
            return field
    return None


def default_size() -> ImageSize:
    return next(size for size in SIZES if size.default)


def default_filename_field() -> FilenameField:
    return next(field for field in FILENAME_FIELDS if field.default)
