from pathlib import Path
from typing import Dict, List, Optional, Tuple

from flickrsync.executor import ActionExecutor
from flickrsync.inventory import find_set_id, list_remote_items
from flickrsync.local_store import collect_local_items, download_file
from flickrsync.models import (
    Delete,
    Download,
    LocalItem,
    PhotosetHandle,
    RemoteItem,
    Rename,
    Reorder,
    Skip,
    SyncOptions,
    Upload,
)
from flickrsync.summary import SyncSummary
from flickrsync.titles import rename_target


def choose_download_source(sizes: List[dict]) -> Tuple[Optional[str], Optional[str]]:
    """
    Pick (url, extension) from a photo's size list. The original video
    wins outright; otherwise the original photo is used.
    """
    url, ext = None, None
    for size in sizes:
        if size.get("media") == "video" and size.get("label") == "Video Original":
            return size.get("source_url"), "mp4"
        if size.get("media") == "photo" and size.get("label") == "Original":
            url, ext = size.get("source_url"), "jpg"
    return url, ext


class FlickrSync:
    """
    Syncs one local folder to the Flickr photoset named after the folder:
     - rename titles by date taken (optional)
     - upload local-only files
     - delete or download set-only photos/videos
     - sort the set by title (optional)
    """

    def __init__(self, client, folder, options: SyncOptions = SyncOptions(), fetcher=download_file):
        self.client = client
        self.folder = Path(folder)
        self.options = options
        self.executor = ActionExecutor(client, options, fetcher)

        # The set is named after the folder
        self.handle = PhotosetHandle(name=self.folder.resolve().name)

        # key -> LocalItem
        self.local_items: Dict[str, LocalItem] = {}
        # id -> RemoteItem, kept in step with the changes we make
        self.remote_items: Dict[str, RemoteItem] = {}

        self.summary = SyncSummary()

    def run(self) -> SyncSummary:
        print(f"Starting to sync photos/videos from folder '{self.folder}' to Flickr...")

        self.collect()

        if self.options.set_titles_by_date_taken:
            self.normalize_titles()

        self.upload_missing()
        self.handle_remote_only()

        if self.options.sort_by_title:
            self.sort_by_title()

        self.summary.remote_count = len(self.remote_items)
        self.summary.report()
        return self.summary

    # -----------------------------
    # 1) INVENTORIES
    # -----------------------------

    def collect(self):
        self.local_items = collect_local_items(self.folder)
        self.summary.local_count = len(self.local_items)

        self.handle.id = find_set_id(self.client, self.handle.name)
        self.remote_items = list_remote_items(self.client, self.handle.id)

    def _remote_keys(self) -> set:
        return {item.title.lower() for item in self.remote_items.values()}

    # -----------------------------
    # 2) TITLES BY DATE TAKEN
    # -----------------------------

    def normalize_titles(self):
        """
        Rename set items to YYYYMMDD-HHMMSS[-n] based on date taken. The
        mirror is updated after each rename so later collision checks see it.
        """
        for item in list(self.remote_items.values()):
            new_title = rename_target(item, self.remote_items)
            if not new_title:
                continue

            result = self.executor.execute(Rename(item, new_title), self.handle)
            if not result.ok:
                self.summary.errors += 1
                continue

            if not self.options.dry_run:
                item.title = new_title
            self.summary.renamed += 1

    # -----------------------------
    # 3) UPLOAD LOCAL-ONLY FILES
    # -----------------------------

    def upload_missing(self):
        remote_keys = self._remote_keys()

        for key, local in self.local_items.items():
            if key in remote_keys:
                self.executor.execute(
                    Skip(key, f"Photo/video {key} is already existing in set, skipping"),
                    self.handle)
                continue

            result = self.executor.execute(Upload(local), self.handle)
            if not result.ok:
                self.summary.errors += 1
                continue

            self.summary.uploaded += 1
            if self.options.dry_run:
                continue

            item_id = result.value
            if not self.executor.add_to_set(self.handle, item_id):
                self.summary.errors += 1
                continue

            self.remote_items[item_id] = RemoteItem(id=item_id, title=key)

    # -----------------------------
    # 4) SET-ONLY ITEMS
    # -----------------------------

    def handle_remote_only(self):
        """
        Delete (-r) or download (-d) photos/videos that are in the set but
        not in the folder; just warn if neither was asked for.
        """
        orphans = [item for item in self.remote_items.values()
                   if item.title.lower() not in self.local_items]

        removed = []
        for item in orphans:
            if self.options.remove:
                result = self.executor.execute(Delete(item), self.handle)
                if result.ok:
                    self.summary.deleted += 1
                    removed.append(item.id)
                else:
                    self.summary.errors += 1
            elif self.options.download_missing:
                self._download(item)
            else:
                self.executor.execute(
                    Skip(item.title,
                         f"WARNING: Photo/video {item.title} not existing in folder anymore, "
                         f"specify -r to remove or -d to download these"),
                    self.handle)

        for item_id in removed:
            del self.remote_items[item_id]

    def _download(self, item: RemoteItem):
        url, ext = choose_download_source(self.client.list_sizes(item.id))
        if not url:
            print(f"WARNING: No original size available for photo/video {item.title}, can't download")
            return

        dest_path = str(self.folder / f"{item.title}.{ext}")
        result = self.executor.execute(Download(item, url, dest_path), self.handle)
        if result.ok:
            self.summary.downloaded += 1
        else:
            self.summary.errors += 1

    # -----------------------------
    # 5) SORT
    # -----------------------------

    def sort_by_title(self):
        if not self.remote_items:
            return

        ordered = sorted(self.remote_items.values(), key=lambda item: (item.title, item.id))
        result = self.executor.execute(Reorder([item.id for item in ordered]), self.handle)
        if not result.ok:
            self.summary.errors += 1
