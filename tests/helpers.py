"""Builders for Digital Collections API payloads used across tests."""

API_URL = "https://api.repo.nypl.org/api/v1"
ITEM_UUID = "510d47da-ef7a-a3d9-e040-e00a18064a99"


def capture_record(uuid, image_id, page, sizes="bftrwqvg", high_res=True):
    """A capture record shaped like the Digital Collections API output."""
    record = {
        "uuid": uuid,
        "imageID": image_id,
        "sortString": f"0000000001|0000000002|{page:010d}",
        "title": f"Page {page}",
        "itemLink": f"http://digitalcollections.nypl.org/items/{uuid}",
        "typeOfResource": "still image",
        "imageLinks": {
            "imageLink": [
                f"http://images.nypl.org/index.php?id={image_id}&t={code}&download=1"
                for code in sizes
            ]
        },
    }
    if high_res:
        record["highResLink"] = f"http://lcweb2.example.org/master/{image_id}u.tif"
    return record


def api_body(captures, page=1, total_pages=1, code="200", message="ok"):
    """Wrap capture records in the nyplAPI envelope."""
    return {
        "nyplAPI": {
            "request": {
                "uuid": ITEM_UUID,
                "perPage": "500",
                "page": str(page),
                "totalPages": str(total_pages),
            },
            "response": {
                "headers": {"status": "success", "code": code, "message": message},
                "numResults": str(len(captures)),
                "capture": captures,
            },
        }
    }
