"""Digital Collections capture records.

A capture is one digitized image (usually one page) of a catalog item.
The API serializes its records from XML, so fields that normally hold a
list collapse to a single value when there is only one element.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dc_download.exceptions import CaptureError

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def as_list(value: Any) -> list:
    """Normalize an API value that may be missing, a single item, or a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass
class Capture:
    """One capture of a catalog item."""

    uuid: str
    image_id: str
    sort_string: str = ""
    image_links: List[str] = field(default_factory=list)
    high_res_link: Optional[str] = None
    title: Optional[str] = None
    item_link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Capture":
        """Create a Capture from an API capture record."""
        image_links = data.get('imageLinks') or {}
        if isinstance(image_links, dict):
            links = as_list(image_links.get('imageLink'))
        else:
            links = as_list(image_links)

        return cls(
            uuid=data.get('uuid', ''),
            image_id=str(data.get('imageID', '')),
            sort_string=data.get('sortString') or '',
            image_links=[str(link) for link in links],
            high_res_link=data.get('highResLink') or None,
            title=data.get('title'),
            item_link=data.get('itemLink'),
        )

    @property
    def page(self) -> Optional[int]:
        """Page number taken from the last ``|`` segment of the sort string."""
        last = self.sort_string.split('|')[-1]
        match = _LEADING_INT.match(last)
        if not match:
            return None
        return int(match.group(1))

    def has_size(self, code: str) -> bool:
        """Whether one of the capture's image links serves the given size."""
        marker = f'&t={code}'
        return any(marker in link for link in self.image_links)

    def filename_value(self, field_name: str) -> str:
        """Return the value used as file stem for a filename field.

        Raises:
            CaptureError: If the field is unknown or has no value
        """
        if field_name == 'image':
            return self.image_id
        if field_name == 'uuid':
            return self.uuid
        if field_name == 'page':
            page = self.page
            if page is None:
                raise CaptureError(
                    f"Page number not available for this capture: {self.uuid}"
                )
            return str(page)
        raise CaptureError(f"Unknown filename field: {field_name}")
