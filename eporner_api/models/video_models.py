"""Video data models for Eporner API responses"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.endpoints import ThumbSize
from ..core.exceptions import DomainConstructionError
from . import canonical
from .canonical import CanonicalValue

logger = logging.getLogger(__name__)

VIDEO_REQUIRED_FIELDS = ("id", "title", "url", "embed")


def _require(record: Optional[CanonicalValue], fields: Tuple[str, ...]) -> None:
    for name in fields:
        if canonical.scalar(canonical.lookup(record, name)) is None:
            raise DomainConstructionError(f"Missing required field: {name}")


class Thumbnail(BaseModel):
    """Video thumbnail"""
    model_config = ConfigDict(frozen=True)

    size: ThumbSize = Field(ThumbSize.MEDIUM, description="Thumbnail size")
    width: int = Field(0, ge=0, description="Width in pixels")
    height: int = Field(0, ge=0, description="Height in pixels")
    src: str = Field("", description="Image URL")

    @classmethod
    def from_record(cls, record: Optional[CanonicalValue]) -> "Thumbnail":
        """Permissive decode: every missing field takes its default"""
        size_text = canonical.as_text(canonical.lookup(record, "size"), ThumbSize.MEDIUM.value)
        try:
            size = ThumbSize(size_text)
        except ValueError:
            logger.debug(f"Unknown thumbnail size '{size_text}', using medium")
            size = ThumbSize.MEDIUM

        return cls(
            size=size,
            width=max(canonical.as_int(canonical.lookup(record, "width")), 0),
            height=max(canonical.as_int(canonical.lookup(record, "height")), 0),
            src=canonical.as_text(canonical.lookup(record, "src")),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Thumbnail":
        return cls.from_record(canonical.from_python(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size.value,
            "width": self.width,
            "height": self.height,
            "src": self.src,
        }

    @property
    def dimensions(self) -> str:
        """Dimensions as ``WIDTHxHEIGHT``"""
        return f"{self.width}x{self.height}"

    @property
    def is_small(self) -> bool:
        return self.size == ThumbSize.SMALL

    @property
    def is_medium(self) -> bool:
        return self.size == ThumbSize.MEDIUM

    @property
    def is_big(self) -> bool:
        return self.size == ThumbSize.BIG


class Video(BaseModel):
    """
    A single video as returned by the search and lookup endpoints.

    ``id``, ``title``, ``url`` and ``embed`` are mandatory; every other field
    is coerced defensively and defaults to an empty value.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Video ID")
    title: str = Field(..., description="Video title")
    keywords: str = Field("", description="Comma-separated tags")
    views: int = Field(0, ge=0, description="Number of views")
    rate: float = Field(0.0, description="Average rating")
    url: str = Field(..., description="Video page URL")
    added: str = Field("", description="Date the video was added")
    length_sec: int = Field(0, ge=0, description="Duration in seconds")
    length_min: str = Field("0:00", description="Duration formatted as m:ss")
    embed: str = Field(..., description="Embeddable player URL")
    default_thumb: Thumbnail = Field(default_factory=Thumbnail, description="Default thumbnail")
    thumbs: Tuple[Thumbnail, ...] = Field((), description="All thumbnails")

    @classmethod
    def from_record(cls, record: Optional[CanonicalValue]) -> "Video":
        """
        Build a video from a decoded record.

        Raises:
            DomainConstructionError: When a mandatory field is missing
        """
        _require(record, VIDEO_REQUIRED_FIELDS)

        default_thumb_record = canonical.lookup(record, "default_thumb")
        default_thumb = (
            Thumbnail.from_record(default_thumb_record)
            if default_thumb_record is not None
            else Thumbnail()
        )
        thumbs = tuple(
            Thumbnail.from_record(item)
            for item in canonical.elements(canonical.lookup(record, "thumbs"))
        )

        try:
            return cls(
                id=canonical.as_text(canonical.lookup(record, "id")),
                title=canonical.as_text(canonical.lookup(record, "title")),
                keywords=canonical.as_text(canonical.lookup(record, "keywords")),
                views=max(canonical.as_int(canonical.lookup(record, "views")), 0),
                rate=canonical.as_float(canonical.lookup(record, "rate")),
                url=canonical.as_text(canonical.lookup(record, "url")),
                added=canonical.as_text(canonical.lookup(record, "added")),
                length_sec=max(canonical.as_int(canonical.lookup(record, "length_sec")), 0),
                length_min=canonical.as_text(canonical.lookup(record, "length_min"), "0:00"),
                embed=canonical.as_text(canonical.lookup(record, "embed")),
                default_thumb=default_thumb,
                thumbs=thumbs,
            )
        except PydanticValidationError as e:
            raise DomainConstructionError(f"Invalid video record: {e}") from e

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Video":
        return cls.from_record(canonical.from_python(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "keywords": self.keywords,
            "views": self.views,
            "rate": self.rate,
            "url": self.url,
            "added": self.added,
            "length_sec": self.length_sec,
            "length_min": self.length_min,
            "embed": self.embed,
            "default_thumb": self.default_thumb.to_dict(),
            "thumbs": [thumb.to_dict() for thumb in self.thumbs],
        }

    @property
    def duration(self) -> str:
        return self.length_min

    @property
    def keyword_list(self) -> List[str]:
        """Keywords split on commas"""
        if not self.keywords:
            return []
        return [keyword.strip() for keyword in self.keywords.split(",")]

    @property
    def has_thumbs(self) -> bool:
        return len(self.thumbs) > 0

    @property
    def first_thumb(self) -> Thumbnail:
        """First thumbnail, or the default one when the list is empty"""
        return self.thumbs[0] if self.thumbs else self.default_thumb

    def embed_html(self, width: int = 640, height: int = 360) -> str:
        """Get an iframe snippet embedding this video"""
        return (
            f'<iframe src="{self.embed}" width="{width}" height="{height}" '
            f'frameborder="0" allowfullscreen></iframe>'
        )


class VideoCollection(BaseModel):
    """
    One page of search results.

    ``count`` is the server-reported page size and may disagree with the
    number of decoded videos; ``len()`` always reports the decoded number.
    """
    model_config = ConfigDict(frozen=True)

    videos: Tuple[Video, ...] = Field((), description="Videos on this page")
    count: int = Field(0, ge=0, description="Server-reported number of videos on this page")
    start: int = Field(0, ge=0, description="Offset of the first video")
    per_page: int = Field(0, ge=0, description="Requested page size")
    page: int = Field(0, ge=0, description="1-based page number")
    time_ms: int = Field(0, ge=0, description="Server-side latency in milliseconds")
    total_count: int = Field(0, ge=0, description="Total number of matching videos")
    total_pages: int = Field(0, ge=0, description="Total number of pages")

    @classmethod
    def from_record(cls, record: Optional[CanonicalValue]) -> "VideoCollection":
        """
        Build a collection from a decoded search response.

        Raises:
            DomainConstructionError: When any video record lacks a mandatory field
        """
        videos = tuple(
            Video.from_record(item)
            for item in canonical.elements(canonical.lookup(record, "videos"))
        )

        def counter(name: str) -> int:
            return max(canonical.as_int(canonical.lookup(record, name)), 0)

        return cls(
            videos=videos,
            count=counter("count"),
            start=counter("start"),
            per_page=counter("per_page"),
            page=counter("page"),
            time_ms=counter("time_ms"),
            total_count=counter("total_count"),
            total_pages=counter("total_pages"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoCollection":
        return cls.from_record(canonical.from_python(data))

    @classmethod
    def empty(cls) -> "VideoCollection":
        """Empty first page, used as the terminal state of a failed fetch"""
        return cls(page=1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videos": [video.to_dict() for video in self.videos],
            "count": self.count,
            "start": self.start,
            "per_page": self.per_page,
            "page": self.page,
            "time_ms": self.time_ms,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }

    def __len__(self) -> int:
        return len(self.videos)

    @property
    def is_empty(self) -> bool:
        return len(self.videos) == 0

    @property
    def has_more_pages(self) -> bool:
        return self.page < self.total_pages

    @property
    def next_page_number(self) -> Optional[int]:
        return self.page + 1 if self.has_more_pages else None

    @property
    def previous_page_number(self) -> Optional[int]:
        return self.page - 1 if self.page > 1 else None


class RemovedVideo(BaseModel):
    """ID of a video that has been removed from the site"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Removed video ID")

    @classmethod
    def from_record(cls, record: Optional[CanonicalValue]) -> "RemovedVideo":
        """
        Raises:
            DomainConstructionError: When the record has no ``id``
        """
        _require(record, ("id",))
        return cls(id=canonical.as_text(canonical.lookup(record, "id")))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RemovedVideo":
        return cls.from_record(canonical.from_python(data))

    @classmethod
    def from_string(cls, video_id: str) -> "RemovedVideo":
        return cls(id=video_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id}

    def __str__(self) -> str:
        return self.id
