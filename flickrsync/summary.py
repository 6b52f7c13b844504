from dataclasses import dataclass


@dataclass
class SyncSummary:
    """Totals for one run, returned by FlickrSync.run()."""
    local_count: int = 0
    uploaded: int = 0
    deleted: int = 0
    downloaded: int = 0
    renamed: int = 0
    remote_count: int = 0
    errors: int = 0

    def line(self) -> str:
        return (f"FlickrSync finished: Photos/videos in folder={self.local_count}, "
                f"Uploaded={self.uploaded}, "
                f"Deleted={self.deleted}, "
                f"Downloaded={self.downloaded}, "
                f"Photos/videos in Flickr set={self.remote_count}")

    def report(self):
        print(self.line())
