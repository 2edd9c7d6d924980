"""URL builders for already-hosted image assets.

Two hosts hand back bare identifiers instead of ready-to-use links:

* Files uploaded through the app's upload endpoint land on Google Drive and
  may come back with only a ``fileId``; :func:`drive_view_url` turns that
  into a direct view link.
* Profile pictures picked through Filestack are referenced by a *handle*;
  the CDN resizes and compresses on the fly when the transformation is
  encoded in the URL path.  Processing happens on the CDN, not here.

Every builder returns ``""`` for an empty identifier so templates can pass
missing values straight through.
"""

from __future__ import annotations

from urllib.parse import quote

DRIVE_VIEW_URL = "https://drive.google.com/uc?export=view&id={file_id}"
FILESTACK_CDN_URL = "https://cdn.filestackcontent.com"

THUMBNAIL_SIZE = 200
PROFILE_PICTURE_SIZE = 400
PDF_IMAGE_SIZE = 300
SOCIAL_SHARE_SIZE = (1200, 630)


def drive_view_url(file_id: str) -> str:
    """Return the direct view link for a Drive file id."""
    if not file_id:
        return ""
    return DRIVE_VIEW_URL.format(file_id=quote(file_id, safe=""))


def _resize_crop_url(handle: str, width: int, height: int, cdn_url: str) -> str:
    if not handle:
        return ""
    return f"{cdn_url.rstrip('/')}/resize=w:{width},h:{height},fit:crop/compress/{handle}"


def optimized_image_url(
    handle: str, size: int = PROFILE_PICTURE_SIZE, cdn_url: str = FILESTACK_CDN_URL
) -> str:
    """Square crop of *size* pixels, compressed."""
    return _resize_crop_url(handle, size, size, cdn_url)


def thumbnail_url(handle: str, cdn_url: str = FILESTACK_CDN_URL) -> str:
    return optimized_image_url(handle, THUMBNAIL_SIZE, cdn_url)


def profile_picture_url(handle: str, cdn_url: str = FILESTACK_CDN_URL) -> str:
    return optimized_image_url(handle, PROFILE_PICTURE_SIZE, cdn_url)


def pdf_image_url(handle: str, cdn_url: str = FILESTACK_CDN_URL) -> str:
    """Picture sized for embedding in a generated CV."""
    return optimized_image_url(handle, PDF_IMAGE_SIZE, cdn_url)


def social_share_url(handle: str, cdn_url: str = FILESTACK_CDN_URL) -> str:
    """1200 x 630 crop, the usual link-preview card size."""
    width, height = SOCIAL_SHARE_SIZE
    return _resize_crop_url(handle, width, height, cdn_url)


def download_url(handle: str, filename: str = "image", cdn_url: str = FILESTACK_CDN_URL) -> str:
    if not handle:
        return ""
    return f"{cdn_url.rstrip('/')}/download=filename:{quote(filename, safe='.-_')}/{handle}"


def raw_url(handle: str, cdn_url: str = FILESTACK_CDN_URL) -> str:
    """Untransformed file."""
    if not handle:
        return ""
    return f"{cdn_url.rstrip('/')}/{handle}"
