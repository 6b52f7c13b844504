from pathlib import Path
from typing import Dict, List, Tuple

import requests

from flickrsync.models import LocalItem


def local_key(file_name: str) -> str:
    """
    Basename up to the first dot, lowercased: 'IMG_1.HEIC' -> 'img_1'.
    """
    return file_name.split(".", 1)[0].lower()


def list_regular_files(folder: Path) -> List[Tuple[str, str]]:
    """
    Non-recursive listing of regular files as (file name, full path),
    sorted by file name. Hidden files (.DS_Store etc.) are left out.
    """
    files = []
    for entry in sorted(Path(folder).iterdir(), key=lambda p: p.name):
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_file():
                files.append((entry.name, str(entry)))
        except OSError as e:
            print(f"ERROR: Cannot read {entry}: {e}")
    return files


def collect_local_items(folder: Path) -> Dict[str, LocalItem]:
    """
    Build key -> LocalItem for every file in 'folder'. When two files share
    a key the first one is kept and the clash is reported.
    """
    items: Dict[str, LocalItem] = {}
    for name, path in list_regular_files(folder):
        key = local_key(name)
        if key in items:
            print(f"ERROR: Photos/videos with duplicate basenames found "
                  f"({path} AND {items[key].path}) - can not sync correctly")
            continue
        items[key] = LocalItem(key=key, path=path)
    return items


def download_file(url: str, dest_path: str, session=None) -> bool:
    """
    Fetch 'url' into dest_path (binary, redirects followed).
    Returns True on success. A partially written file is removed.
    """
    http = session or requests
    dest = Path(dest_path)
    try:
        with http.get(url, stream=True, allow_redirects=True, timeout=60) as resp:
            if resp.status_code != 200:
                print(f"Download failed for {url}: {resp.status_code}")
                return False
            with open(dest, "wb") as f:
                for chunk in resp.iter_content(chunk_size=1 << 16):
                    if chunk:
                        f.write(chunk)
    except (requests.RequestException, OSError) as e:
        print(f"Download failed for {url}: {e}")
        if dest.exists():
            dest.unlink()
        return False
    return True
