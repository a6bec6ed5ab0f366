"""
Typed view of the hh.ru "my resumes" listing.

The listing JSON is validated once here; anything downstream works with
ResumeSummary objects and never indexes into raw dicts.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import SchemaError


VISIBLE_ACCESS_TYPE = "clients"


@dataclass(frozen=True)
class ResumeSummary:
    """One resume from the listing, reduced to what the bump decision needs."""
    id: str
    title: str
    visible_to_clients: bool
    can_publish_now: bool
    next_publish_at: Optional[str] = None
    access_type: Optional[str] = None


def _access_type_id(item: Dict[str, Any]) -> Optional[str]:
    access = item.get("access")
    if not isinstance(access, dict):
        return None
    access_type = access.get("type")
    if not isinstance(access_type, dict):
        return None
    type_id = access_type.get("id")
    return type_id if isinstance(type_id, str) else None


def parse_resume(item: Any) -> ResumeSummary:
    """
    Convert one listing item into a ResumeSummary.

    Args:
        item: Element of the listing's "items" array

    Returns:
        ResumeSummary

    Raises:
        SchemaError: If the item is not an object or lacks string id/title
    """
    if not isinstance(item, dict):
        raise SchemaError(f"Resume item is not an object: {item!r}")

    resume_id = item.get("id")
    title = item.get("title")
    if not isinstance(resume_id, str) or not resume_id:
        raise SchemaError(f"Resume item has no string 'id': {item!r}")
    if not isinstance(title, str):
        raise SchemaError(f"Resume {resume_id} has no string 'title'")

    access_type = _access_type_id(item)
    next_publish_at = item.get("next_publish_at")

    return ResumeSummary(
        id=resume_id,
        title=title,
        visible_to_clients=access_type == VISIBLE_ACCESS_TYPE,
        can_publish_now=item.get("can_publish_or_update") is True,
        next_publish_at=next_publish_at if isinstance(next_publish_at, str) else None,
        access_type=access_type,
    )


def parse_listing(payload: Any) -> List[ResumeSummary]:
    """
    Validate a listing payload and return its resumes in listing order.

    Raises:
        SchemaError: If "items" is missing or any item is malformed
    """
    if not isinstance(payload, dict):
        raise SchemaError("Listing payload is not a JSON object")

    items = payload.get("items")
    if not isinstance(items, list):
        raise SchemaError("Listing payload has no 'items' list")

    return [parse_resume(item) for item in items]
