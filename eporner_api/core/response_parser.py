"""Decoding of JSON, XML and plain-text API responses into domain models"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Union

from .exceptions import ParseError
from ..clients.http_client import RawResponse
from ..models import canonical
from ..models.canonical import Attributed, CanonicalValue, Leaf, Node, Sequence
from ..models.video_models import RemovedVideo, Video, VideoCollection

logger = logging.getLogger(__name__)


class ResponseParser:
    """
    Parser for API responses.

    Bodies are decoded according to their Content-Type header: JSON when it
    contains ``application/json``, XML when it contains ``xml``, otherwise
    JSON is tried first with XML as the fallback. An empty body decodes to
    an empty mapping.
    """

    def parse_search(self, response: RawResponse) -> VideoCollection:
        """Parse a search response into one page of results"""
        data = self.decode(response)
        collection = VideoCollection.from_record(data)
        logger.debug(
            f"Parsed search page {collection.page}/{collection.total_pages} "
            f"with {len(collection)} videos"
        )
        return collection

    def parse_video(self, response: RawResponse) -> Optional[Video]:
        """
        Parse a video lookup response.

        Returns:
            The video, or None when the body is empty (video removed)
        """
        data = self.decode(response)

        if canonical.is_empty(data):
            logger.debug("Empty lookup response, video was removed")
            return None

        return Video.from_record(data)

    def parse_removed(self, response: RawResponse) -> List[RemovedVideo]:
        """Parse a JSON or XML removed videos response"""
        data = self.decode(response)
        return [RemovedVideo.from_record(item) for item in canonical.elements(data)]

    def parse_removed_txt(self, body: Union[str, bytes]) -> List[RemovedVideo]:
        """Parse a txt removed videos response: one ID per non-blank line"""
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")

        removed = []
        for line in body.splitlines():
            video_id = line.strip()
            if video_id:
                removed.append(RemovedVideo.from_string(video_id))
        return removed

    def decode(self, response: RawResponse) -> CanonicalValue:
        return self.decode_body(response.body, response.headers.get("content-type"))

    def decode_body(self, body: bytes, content_type: Optional[str] = None) -> CanonicalValue:
        """
        Decode a raw body into the canonical structure.

        Raises:
            ParseError: When the body is malformed; with no usable content
                type the XML failure is reported once both attempts fail
        """
        if not body:
            return canonical.EMPTY

        content_type = (content_type or "").lower()

        if "application/json" in content_type:
            return self._parse_json(body)

        if "xml" in content_type:
            return self._parse_xml(body)

        try:
            return self._parse_json(body)
        except ParseError as e:
            logger.debug(f"Body is not JSON, trying XML: {e}")
            return self._parse_xml(body)

    def _parse_json(self, body: bytes) -> CanonicalValue:
        try:
            data = json.loads(body)
            if data is None:
                return canonical.EMPTY
            return canonical.from_python(data)
        except RecursionError as e:
            raise ParseError("Failed to parse JSON response: document nested too deeply") from e
        except ValueError as e:
            raise ParseError(f"Failed to parse JSON response: {e}") from e

    def _parse_xml(self, body: bytes) -> CanonicalValue:
        try:
            root = ET.fromstring(body)
            # The document element itself is not part of the structure
            return Node(self._xml_children(root), dict(root.attrib))
        except RecursionError as e:
            raise ParseError("Failed to parse XML response: document nested too deeply") from e
        except ET.ParseError as e:
            raise ParseError(f"Failed to parse XML response: {e}") from e

    def _xml_children(self, element: ET.Element) -> Dict[str, CanonicalValue]:
        children: Dict[str, CanonicalValue] = {}

        for child in element:
            key = _local_name(child.tag)
            value = self._xml_value(child)

            # Repeated sibling elements collect into a sequence
            if key in children:
                existing = children[key]
                if isinstance(existing, Sequence):
                    children[key] = Sequence(existing.items + (value,))
                else:
                    children[key] = Sequence((existing, value))
            else:
                children[key] = value

        return children

    def _xml_value(self, element: ET.Element) -> CanonicalValue:
        attributes = {_local_name(key): value for key, value in element.attrib.items()}

        if len(element) > 0:
            return Node(self._xml_children(element), attributes)

        text = element.text or ""
        if attributes:
            return Attributed(text, attributes)
        return Leaf(text)


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag or attribute name"""
    return tag.rsplit("}", 1)[-1]
