"""Asset models - uploaded media files."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .wire import expect_list, expect_object, opt_int, opt_str


@dataclass
class Asset:
    id: str
    name: str = ""
    type: str = ""                      # video, image, audio, font
    mime_type: Optional[str] = None
    size_bytes: int = 0
    download_url: Optional[str] = None
    uploaded_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Asset":
        data = expect_object(data, "asset")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            type=data.get("type") or "",
            mime_type=opt_str(data, "mimeType"),
            size_bytes=opt_int(data, "sizeBytes", "asset"),
            download_url=opt_str(data, "downloadUrl"),
            uploaded_at=opt_str(data, "uploadedAt"),
        )


@dataclass
class AssetList:
    assets: List[Asset] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "AssetList":
        data = expect_object(data, "assets list")
        return cls(
            assets=[Asset.from_dict(a) for a in expect_list(data, "assets", "assets list")],
            next_cursor=opt_str(data, "nextCursor"),
            has_more=bool(data.get("hasMore", False)),
        )


@dataclass
class UploadTarget:
    """Response to POST /assets: the new record and where to PUT the bytes."""
    id: str
    upload_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "UploadTarget":
        data = expect_object(data, "asset upload")
        return cls(
            id=str(data.get("id", "")),
            upload_url=opt_str(data, "uploadUrl"),
        )
