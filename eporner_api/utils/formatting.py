"""Display helpers and one-call shortcuts"""

from typing import Optional

from ..clients.eporner_client import EpornerClient
from ..models.params import SearchParams, VideoIdParams
from ..models.video_models import Video, VideoCollection


def format_duration(seconds: int) -> str:
    """Format seconds as m:ss, or h:mm:ss from one hour up"""
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_views(views: int) -> str:
    """Format a view count with a K/M suffix"""
    if views >= 1_000_000:
        return f"{views / 1_000_000:.1f}M"
    if views >= 1_000:
        return f"{views / 1_000:.1f}K"
    return str(views)


def format_rating(rate: float) -> str:
    return f"{rate:.2f}"


def search_videos(
    query: str,
    per_page: int = 30,
    order: str = "latest",
    thumbsize: str = "medium"
) -> VideoCollection:
    """Search with a throwaway client"""
    params = SearchParams(query=query, per_page=per_page, order=order, thumbsize=thumbsize)
    with EpornerClient() as client:
        return client.search(params)


def get_video(video_id: str, thumbsize: str = "medium") -> Optional[Video]:
    """Look up one video with a throwaway client"""
    with EpornerClient() as client:
        return client.get_video(video_id, VideoIdParams(thumbsize=thumbsize))
