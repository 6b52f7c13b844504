"""
Turns sync decisions into Flickr calls and file downloads.

With dry_run set nothing is changed: every decision is only printed and
reported back as a success, so the caller can keep its in-memory state and
counters as if the action had happened.
"""

from flickrsync.local_store import download_file
from flickrsync.models import (
    ApiResult,
    Delete,
    Download,
    PhotosetHandle,
    Rename,
    Reorder,
    ResultKind,
    Skip,
    SyncOptions,
    Upload,
)


class ActionExecutor:

    def __init__(self, client, options: SyncOptions, fetcher=download_file):
        self.client = client
        self.options = options
        self.fetcher = fetcher

    @property
    def dry_run(self) -> bool:
        return self.options.dry_run

    def execute(self, decision, handle: PhotosetHandle) -> ApiResult:
        if isinstance(decision, Upload):
            return self._upload(decision)
        if isinstance(decision, Delete):
            return self._delete(decision)
        if isinstance(decision, Download):
            return self._download(decision)
        if isinstance(decision, Rename):
            return self._rename(decision)
        if isinstance(decision, Reorder):
            return self._reorder(decision, handle)
        if isinstance(decision, Skip):
            if decision.message:
                print(decision.message)
            return ApiResult.success()
        raise TypeError(f"Unknown decision {decision!r}")

    def add_to_set(self, handle: PhotosetHandle, item_id: str) -> bool:
        """
        Put an uploaded item into the photoset, creating the set with the
        item as its primary photo if it does not exist yet.
        """
        if handle.id is None:
            result = self.client.create_set(handle.name, item_id)
            if not result.ok:
                print(f"ERROR: Unable to create photoset '{handle.name}': {result.describe()}")
                return False
            handle.id, url = result.value
            print(f"New photoset '{handle.name}' created (id={handle.id}, URL={url})")
            return True

        result = self.client.add_item_to_set(handle.id, item_id)
        if not result.ok:
            print(f"ERROR: Unable to add uploaded photo/video 'id={item_id}' "
                  f"to set '{handle.name}': {result.describe()}")
            return False
        return True

    # -----------------------------
    # Per decision
    # -----------------------------

    def _upload(self, decision: Upload) -> ApiResult:
        item = decision.item
        if self.dry_run:
            print(f"Need to upload photo {item.path}")
            return ApiResult.success()

        print(f"Uploading photo/video {item.path} ...", end="", flush=True)
        result = self.client.upload_item(item.key, item.path)
        if result.ok:
            print(f"Done (id={result.value})")
        else:
            print(f"Failed! ({result.describe()})")
        return result

    def _delete(self, decision: Delete) -> ApiResult:
        item = decision.item
        if self.dry_run:
            print(f"Photo/video {item.title} not existing in folder anymore - need to delete it")
            return ApiResult.success()

        print(f"Photo/video {item.title} not existing in folder anymore - deleting")
        result = self.client.delete_item(item.id)
        if not result.ok:
            print(f"ERROR: Unable to delete photo/video {item.title} (id={item.id}): {result.describe()}")
        return result

    def _download(self, decision: Download) -> ApiResult:
        if self.dry_run:
            print(f"Need to download photo/video file '{decision.dest_path}'")
            return ApiResult.success()

        print(f"Starting to download photo/video file '{decision.dest_path}' ...", end="", flush=True)
        if self.fetcher(decision.url, decision.dest_path):
            print("Done")
            return ApiResult.success(decision.dest_path)
        print("Failed!")
        return ApiResult.failure(ResultKind.NETWORK_ERROR, f"Unable to fetch {decision.url}")

    def _rename(self, decision: Rename) -> ApiResult:
        item = decision.item
        if self.dry_run:
            print(f"Need to set photo title based on date taken {item.title} => {decision.new_title}")
            return ApiResult.success()

        print(f"Setting photo title based on date taken {item.title} => {decision.new_title}")
        result = self.client.update_title_and_date(item.id, decision.new_title, item.capture_date)
        if not result.ok:
            print(f"ERROR: Unable to set photo {item.title} title to {decision.new_title}: "
                  f"{result.describe()}")
        return result

    def _reorder(self, decision: Reorder, handle: PhotosetHandle) -> ApiResult:
        if self.dry_run:
            print(f"Will reorder photoset '{handle.name}' by photo/video titles")
            return ApiResult.success()

        if handle.id is None:
            print(f"ERROR: Unable to reorder photoset '{handle.name}': set does not exist")
            return ApiResult.failure(ResultKind.API_ERROR, "Photoset does not exist")

        result = self.client.reorder_set(handle.id, decision.ordered_ids)
        if result.ok:
            print(f"Photoset reordered '{handle.id}' by photo/video titles")
        else:
            print(f"ERROR: Unable to reorder photoset '{handle.id}' by photo/video titles: "
                  f"{result.describe()}")
        return result
