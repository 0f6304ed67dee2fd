"""Eporner API v2 client"""

import logging
from typing import List, Optional, Union

from .http_client import HttpClient, TransportGateway
from ..core import endpoints
from ..core.endpoints import ResponseFormat, wire_value
from ..core.exceptions import ValidationError
from ..core.logging import log_performance
from ..core.response_parser import ResponseParser
from ..models.params import SearchParams, VideoIdParams
from ..models.video_models import RemovedVideo, Video, VideoCollection
from ..services.video_iterator import VideoIterator

# Setup logging
logger = logging.getLogger(__name__)


class EpornerClient:
    """
    Eporner API v2 client.

    Provides the three API methods (search, video lookup by ID, removed
    videos) plus a lazy iterator over paginated search results. Each call
    performs at most one blocking request and raises on failure; there is no
    retry or caching.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[TransportGateway] = None
    ):
        """
        Initialize the client.

        Args:
            api_key: Optional API key (if None, loads from settings)
            transport: Transport gateway to use instead of the default httpx one
        """
        self.http_client = transport if transport is not None else HttpClient(api_key=api_key)
        self.parser = ResponseParser()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

    def close(self) -> None:
        close = getattr(self.http_client, "close", None)
        if close is not None:
            close()

    @property
    def api_key(self) -> Optional[str]:
        return getattr(self.http_client, "api_key", None)

    @log_performance("search")
    def search(self, params: Optional[SearchParams] = None) -> VideoCollection:
        """
        Search for videos.

        Args:
            params: Search parameters (defaults when None)

        Returns:
            One page of results

        Raises:
            ValidationError: When a parameter is outside its domain
            TransportError: On network failure or a non-2xx response
            ParseError: When the response body is malformed
            DomainConstructionError: When a video record lacks a mandatory field
        """
        params = params or SearchParams()
        query = params.to_query()

        response = self.http_client.get(endpoints.ENDPOINT_SEARCH, query)
        return self.parser.parse_search(response)

    @log_performance("get_video")
    def get_video(self, video_id: str, params: Optional[VideoIdParams] = None) -> Optional[Video]:
        """
        Get a single video by ID.

        Args:
            video_id: The video ID
            params: Optional lookup parameters

        Returns:
            The video, or None if it was removed
        """
        if not video_id:
            raise ValidationError.empty_id(video_id)

        params = params or VideoIdParams()
        query = params.to_query(video_id)

        response = self.http_client.get(endpoints.ENDPOINT_ID, query)
        return self.parser.parse_video(response)

    @log_performance("get_removed_videos")
    def get_removed_videos(self, fmt: Union[str, ResponseFormat] = ResponseFormat.JSON) -> List[RemovedVideo]:
        """
        Get the IDs of removed videos.

        Args:
            fmt: Response format (json, xml, txt)
        """
        if not endpoints.is_valid_removed_format(fmt):
            raise ValidationError.invalid_format(fmt, endpoints.VALID_REMOVED_FORMATS)

        fmt = wire_value(fmt)
        response = self.http_client.get(endpoints.ENDPOINT_REMOVED, {"format": fmt})

        # txt bodies are bare IDs and never go through JSON/XML decoding
        if fmt == ResponseFormat.TXT.value:
            return self.parser.parse_removed_txt(response.body)

        return self.parser.parse_removed(response)

    def search_iterator(self, params: Optional[SearchParams] = None) -> VideoIterator:
        """Get an iterator over every video matching the search, across pages"""
        return VideoIterator(self, params or SearchParams())
