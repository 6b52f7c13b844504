"""
Title normalization: bring photo titles into the YYYYMMDD-HHMMSS[-n] form
derived from the date the photo was taken.
"""

import re
from typing import Iterable, Mapping, Optional

from flickrsync.models import RemoteItem

# Length of YYYYMMDD-HHMMSS
CANONICAL_TITLE_LENGTH = 15

# date_taken as reported by Flickr: YYYY-MM-DD HH:MM:SS
CAPTURE_DATE_LENGTH = 19

CANONICAL_TITLE_RE = re.compile(r"^\d{8}-\d{6}(-\d+)?$")


def is_canonical(title: str) -> bool:
    return bool(CANONICAL_TITLE_RE.fullmatch(title or ""))


def canonical_from_capture_date(capture_date: Optional[str]) -> Optional[str]:
    """
    '2024-03-05 13:07:09' -> '20240305-130709'.
    Returns None if the date is missing or too short to convert.
    """
    if not capture_date or len(capture_date) < CAPTURE_DATE_LENGTH:
        return None
    d = capture_date
    return d[0:4] + d[5:7] + d[8:10] + "-" + d[11:13] + d[14:16] + d[17:19]


def resolve_collision(candidate: str, existing_titles: Iterable[str]) -> str:
    """
    Append -1, -2, ... to candidate until it no longer clashes with any of
    existing_titles.
    """
    taken = set(existing_titles)
    title = candidate
    suffix = 0
    while title in taken:
        suffix += 1
        title = f"{candidate}-{suffix}"
    return title


def rename_target(item: RemoteItem, items: Mapping[str, RemoteItem]) -> Optional[str]:
    """
    Return the new title 'item' should get, or None if it should be left
    alone. 'items' is the live id -> RemoteItem mirror of the photoset.
    """
    if is_canonical(item.title):
        return None

    candidate = canonical_from_capture_date(item.capture_date)
    if not candidate:
        return None

    # Already carries the right date prefix, only the suffix differs
    if item.title[:CANONICAL_TITLE_LENGTH] == candidate:
        return None

    others = (other.title for other_id, other in items.items() if other_id != item.id)
    return resolve_collision(candidate, others)
