"""
Data structures shared by the sync components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


@dataclass(frozen=True)
class LocalItem:
    """A file in the local folder, keyed by its lowercased basename."""
    key: str
    path: str


@dataclass
class RemoteItem:
    """A photo/video in the Flickr photoset. Title may be renamed in place."""
    id: str
    title: str
    capture_date: Optional[str] = None
    description: str = ""


@dataclass
class PhotosetHandle:
    name: str
    id: Optional[str] = None


@dataclass(frozen=True)
class SyncOptions:
    dry_run: bool = False
    remove: bool = False
    download_missing: bool = False
    sort_by_title: bool = False
    set_titles_by_date_taken: bool = False


# -----------------------------
# Remote call results
# -----------------------------

class ResultKind(Enum):
    OK = "ok"
    API_ERROR = "api_error"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class ApiResult:
    kind: ResultKind
    value: Any = None
    code: Optional[int] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.OK

    @classmethod
    def success(cls, value=None) -> "ApiResult":
        return cls(ResultKind.OK, value=value)

    @classmethod
    def failure(cls, kind: ResultKind, message: str, code: Optional[int] = None) -> "ApiResult":
        return cls(kind, code=code, message=message)

    def describe(self) -> str:
        """Short text used in error lines, e.g. '1: Photo not found'."""
        if self.code is not None:
            return f"{self.code}: {self.message}"
        return self.message or self.kind.value


# -----------------------------
# Decisions
# -----------------------------

@dataclass(frozen=True)
class Upload:
    item: LocalItem


@dataclass(frozen=True)
class Delete:
    item: RemoteItem


@dataclass(frozen=True)
class Download:
    item: RemoteItem
    url: str
    dest_path: str


@dataclass(frozen=True)
class Rename:
    item: RemoteItem
    new_title: str


@dataclass(frozen=True)
class Reorder:
    ordered_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Skip:
    title: str
    message: str = ""
