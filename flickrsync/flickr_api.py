"""
Thin client for the parts of the Flickr REST API the sync needs.

Read-only listing calls return plain lists (empty on error, after printing
the error). Mutating calls return an ApiResult so the caller can decide what
to report and whether to update its in-memory state.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

import requests
from oauthlib import oauth1
from requests_oauthlib import OAuth1Session

from flickrsync.config import PAGE_SIZE, REST_URL, UPLOAD_URL
from flickrsync.models import ApiResult, RemoteItem, ResultKind

REQUEST_TIMEOUT = 60
UPLOAD_TIMEOUT = 600

ITEM_EXTRAS = "date_upload,date_taken,description"

# Privacy settings for new uploads: visible to family only, safe, photo
# content type, hidden from public searches.
UPLOAD_PARAMS = {
    "is_public": "0",
    "is_friend": "0",
    "is_family": "1",
    "safety_level": "1",
    "content_type": "1",
    "hidden": "1",
}


def _content(value) -> str:
    """Flickr wraps some text fields as {"_content": "..."}."""
    if isinstance(value, dict):
        return value.get("_content", "") or ""
    return value or ""


class FlickrClient:
    """
    Signs every request with the user's OAuth 1.0a access token.
    """

    def __init__(self, credentials: Dict[str, str], session=None, upload_session=None):
        oauth_args = dict(
            client_key=credentials["oauth_client_key"],
            client_secret=credentials["oauth_client_secret"],
            resource_owner_key=credentials["oauth_token"],
            resource_owner_secret=credentials["oauth_token_secret"],
        )
        self.session = session or OAuth1Session(**oauth_args)
        # Uploads are multipart, so they are signed by hand (only the
        # non-file fields take part in the signature).
        self.upload_session = upload_session or requests.Session()
        self._signer = oauth1.Client(**oauth_args)

    # -----------------------------
    # Low level
    # -----------------------------

    def _call(self, method: str, post: bool = False, **params) -> ApiResult:
        """
        Call a REST method. On success the value is the decoded JSON body.
        """
        params.update(method=method, format="json", nojsoncallback="1")
        try:
            if post:
                resp = self.session.post(REST_URL, data=params, timeout=REQUEST_TIMEOUT)
            else:
                resp = self.session.get(REST_URL, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            return ApiResult.failure(ResultKind.NETWORK_ERROR, str(e))

        if resp.status_code != 200:
            return ApiResult.failure(ResultKind.HTTP_ERROR, resp.text[:200], code=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            return ApiResult.failure(ResultKind.API_ERROR, "Invalid JSON in response")

        if data.get("stat") != "ok":
            return ApiResult.failure(ResultKind.API_ERROR,
                                     data.get("message", "Unknown"),
                                     code=data.get("code"))
        return ApiResult.success(data)

    # -----------------------------
    # Listing
    # -----------------------------

    def list_sets(self) -> List[dict]:
        """
        All photosets of the user as [{"id": ..., "title": ...}].
        """
        result = self._call("flickr.photosets.getList")
        if not result.ok:
            print(f"ERROR: Unable to list photosets: {result.describe()}")
            return []
        photosets = result.value.get("photosets", {}).get("photoset", [])
        return [{"id": str(ps["id"]), "title": _content(ps.get("title"))} for ps in photosets]

    def list_items(self, set_id: str) -> List[RemoteItem]:
        """
        Every photo/video in the photoset, across all pages.
        """
        items: List[RemoteItem] = []
        page = 1
        while True:
            result = self._call("flickr.photosets.getPhotos",
                                photoset_id=set_id,
                                extras=ITEM_EXTRAS,
                                per_page=str(PAGE_SIZE),
                                page=str(page))
            if not result.ok:
                print(f"ERROR: Unable to list photos of set {set_id}: {result.describe()}")
                break

            photoset = result.value.get("photoset", {})
            for photo in photoset.get("photo", []):
                items.append(RemoteItem(
                    id=str(photo["id"]),
                    title=_content(photo.get("title")),
                    capture_date=photo.get("datetaken") or None,
                    description=_content(photo.get("description")),
                ))

            pages = int(photoset.get("pages", 1) or 1)
            if page >= pages:
                break
            page += 1
        return items

    def list_sizes(self, item_id: str) -> List[dict]:
        """
        Available sizes as [{"media": ..., "label": ..., "source_url": ...}].
        """
        result = self._call("flickr.photos.getSizes", photo_id=item_id)
        if not result.ok:
            print(f"ERROR: Unable to get sizes of photo/video id={item_id}: {result.describe()}")
            return []
        sizes = result.value.get("sizes", {}).get("size", [])
        return [{"media": s.get("media", ""),
                 "label": s.get("label", ""),
                 "source_url": s.get("source", "")} for s in sizes]

    # -----------------------------
    # Mutations
    # -----------------------------

    def create_set(self, title: str, primary_item_id: str) -> ApiResult:
        """
        Value on success is (set_id, url).
        """
        result = self._call("flickr.photosets.create", post=True,
                            title=title, primary_photo_id=primary_item_id)
        if not result.ok:
            return result
        photoset = result.value.get("photoset", {})
        return ApiResult.success((str(photoset.get("id", "")), photoset.get("url", "")))

    def add_item_to_set(self, set_id: str, item_id: str) -> ApiResult:
        return self._call("flickr.photosets.addPhoto", post=True,
                          photoset_id=set_id, photo_id=item_id)

    def delete_item(self, item_id: str) -> ApiResult:
        return self._call("flickr.photos.delete", post=True, photo_id=item_id)

    def update_title_and_date(self, item_id: str, title: str, capture_date: Optional[str]) -> ApiResult:
        result = self._call("flickr.photos.setMeta", post=True, photo_id=item_id, title=title)
        if not result.ok or not capture_date:
            return result
        return self._call("flickr.photos.setDates", post=True,
                          photo_id=item_id, date_taken=capture_date)

    def reorder_set(self, set_id: str, ordered_ids: List[str]) -> ApiResult:
        return self._call("flickr.photosets.reorderPhotos", post=True,
                          photoset_id=set_id, photo_ids=",".join(ordered_ids))

    def upload_item(self, title: str, file_path: str) -> ApiResult:
        """
        Upload a local file. Value on success is the new photo id.
        """
        params = dict(UPLOAD_PARAMS, title=title)
        _, headers, _ = self._signer.sign(
            UPLOAD_URL,
            http_method="POST",
            body=params,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        path = Path(file_path)
        try:
            with open(path, "rb") as f:
                resp = self.upload_session.post(
                    UPLOAD_URL,
                    headers={"Authorization": headers["Authorization"]},
                    data=params,
                    files={"photo": (path.name, f)},
                    timeout=UPLOAD_TIMEOUT,
                )
        except (requests.RequestException, OSError) as e:
            return ApiResult.failure(ResultKind.NETWORK_ERROR, str(e))

        if resp.status_code != 200:
            return ApiResult.failure(ResultKind.HTTP_ERROR, resp.text[:200], code=resp.status_code)
        return parse_upload_response(resp.text)


def parse_upload_response(text: str) -> ApiResult:
    """
    <rsp stat="ok"><photoid>123</photoid></rsp> or
    <rsp stat="fail"><err code="3" msg="..."/></rsp>
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return ApiResult.failure(ResultKind.API_ERROR, "Invalid XML in upload response")

    if root.get("stat") == "ok":
        photo_id = root.findtext("photoid")
        if photo_id:
            return ApiResult.success(photo_id.strip())
        return ApiResult.failure(ResultKind.API_ERROR, "No photoid in upload response")

    err = root.find("err")
    if err is None:
        return ApiResult.failure(ResultKind.API_ERROR, "Unknown upload error")
    code = err.get("code")
    return ApiResult.failure(ResultKind.API_ERROR,
                             err.get("msg", "Unknown"),
                             code=int(code) if code and code.isdigit() else None)
