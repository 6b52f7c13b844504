from typing import Dict, Optional

from flickrsync.models import RemoteItem


def find_set_id(client, name: str) -> Optional[str]:
    """
    Return the id of the photoset titled 'name', or None.
    """
    set_id = None
    for photoset in client.list_sets():
        if photoset.get("title") == name:
            set_id = photoset["id"]
            print(f"Flickr photoset '{name}' (id={set_id}) is already existing")
    return set_id


def list_remote_items(client, set_id: Optional[str]) -> Dict[str, RemoteItem]:
    """
    id -> RemoteItem for every photo/video in the set.
    Empty if the set does not exist yet.
    """
    if not set_id:
        return {}
    return {item.id: item for item in client.list_items(set_id)}
