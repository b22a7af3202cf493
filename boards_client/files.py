"""File metadata and content-type helpers for board attachments."""

import mimetypes
import os
import time
from dataclasses import dataclass

UNSAFE_CONTENT_TYPES = (
    "application/javascript",
    "application/ecmascript",
    "text/javascript",
    "text/ecmascript",
    "application/x-javascript",
    "text/html",
)

MEDIA_CONTENT_TYPES = (
    "image/jpeg",
    "image/png",
    "image/bmp",
    "image/gif",
    "image/tiff",
    "video/avi",
    "video/mpeg",
    "video/mp4",
    "audio/mpeg",
    "audio/wav",
)


def _base_type(content_type):
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_unsafe_content_type(content_type):
    """True for types a browser would execute (scripts, HTML)."""
    return _base_type(content_type) in UNSAFE_CONTENT_TYPES


def is_media_content_type(content_type):
    return _base_type(content_type) in MEDIA_CONTENT_TYPES


@dataclass(frozen=True)
class FileInfo:
    name: str
    extension: str
    mime_type: str
    creator_id: str = "boards"
    create_at: int = 0
    update_at: int = 0

    def to_dict(self):
        return {
            "name": self.name,
            "extension": self.extension,
            "mime_type": self.mime_type,
            "creator_id": self.creator_id,
            "create_at": self.create_at,
            "update_at": self.update_at,
        }


def new_file_info(name):
    """Describe an uploaded file by name. Timestamps are epoch milliseconds."""
    extension = os.path.splitext(name)[1].lower()
    mime_type = mimetypes.types_map.get(extension, "") if extension else ""
    now = int(time.time() * 1000)
    return FileInfo(
        name=name,
        extension=extension,
        mime_type=mime_type,
        create_at=now,
        update_at=now,
    )
