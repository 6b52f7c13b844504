from dataclasses import replace

import pytest

from flickrsync.models import ApiResult, RemoteItem, ResultKind


class FakeFlickrClient:
    """
    In-memory stand-in for FlickrClient. State persists across runs so a
    second sync sees the effect of the first.
    """

    def __init__(self, sets=None, items=None, sizes=None, fail=()):
        self.sets = list(sets or [])
        self.items = {set_id: list(lst) for set_id, lst in (items or {}).items()}
        self.sizes = dict(sizes or {})
        self.fail = set(fail)
        self.calls = []
        self._next_id = 100
        self._uploaded = {}

    def _new_id(self):
        self._next_id += 1
        return str(self._next_id)

    def _failure(self, name):
        return ApiResult.failure(ResultKind.API_ERROR, f"{name} failed", code=99)

    def _find(self, item_id):
        for lst in self.items.values():
            for item in lst:
                if item.id == item_id:
                    return item
        return None

    def mutating_calls(self):
        return [c for c in self.calls if c[0] not in ("list_sets", "list_items", "list_sizes")]

    def titles(self, set_id):
        return sorted(item.title for item in self.items.get(set_id, []))

    # listing

    def list_sets(self):
        self.calls.append(("list_sets",))
        return [dict(s) for s in self.sets]

    def list_items(self, set_id):
        self.calls.append(("list_items", set_id))
        return [replace(item) for item in self.items.get(set_id, [])]

    def list_sizes(self, item_id):
        self.calls.append(("list_sizes", item_id))
        return list(self.sizes.get(item_id, []))

    # mutations

    def upload_item(self, title, file_path):
        self.calls.append(("upload_item", title, file_path))
        if "upload_item" in self.fail:
            return self._failure("upload_item")
        item_id = self._new_id()
        self._uploaded[item_id] = RemoteItem(id=item_id, title=title)
        return ApiResult.success(item_id)

    def create_set(self, title, primary_item_id):
        self.calls.append(("create_set", title, primary_item_id))
        if "create_set" in self.fail:
            return self._failure("create_set")
        set_id = "set" + self._new_id()
        self.sets.append({"id": set_id, "title": title})
        self.items[set_id] = [self._uploaded[primary_item_id]]
        return ApiResult.success((set_id, f"https://flickr.example/sets/{set_id}"))

    def add_item_to_set(self, set_id, item_id):
        self.calls.append(("add_item_to_set", set_id, item_id))
        if "add_item_to_set" in self.fail:
            return self._failure("add_item_to_set")
        self.items[set_id].append(self._uploaded[item_id])
        return ApiResult.success()

    def delete_item(self, item_id):
        self.calls.append(("delete_item", item_id))
        if "delete_item" in self.fail:
            return self._failure("delete_item")
        for set_id, lst in self.items.items():
            self.items[set_id] = [item for item in lst if item.id != item_id]
        return ApiResult.success()

    def update_title_and_date(self, item_id, title, capture_date):
        self.calls.append(("update_title_and_date", item_id, title, capture_date))
        if "update_title_and_date" in self.fail:
            return self._failure("update_title_and_date")
        self._find(item_id).title = title
        return ApiResult.success()

    def reorder_set(self, set_id, ordered_ids):
        self.calls.append(("reorder_set", set_id, list(ordered_ids)))
        if "reorder_set" in self.fail:
            return self._failure("reorder_set")
        by_id = {item.id: item for item in self.items[set_id]}
        self.items[set_id] = [by_id[i] for i in ordered_ids]
        return ApiResult.success()


@pytest.fixture
def make_client():
    return FakeFlickrClient


@pytest.fixture
def folder(tmp_path):
    """An empty folder named like the photoset it syncs to."""
    path = tmp_path / "Holiday"
    path.mkdir()
    return path


def add_files(folder, *names):
    for name in names:
        (folder / name).write_bytes(b"data")


@pytest.fixture
def touch():
    return add_files
