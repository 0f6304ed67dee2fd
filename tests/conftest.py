"""Pytest configuration and shared fixtures"""

import json
import pytest

from eporner_api.clients.eporner_client import EpornerClient
from eporner_api.clients.http_client import RawResponse
from eporner_api.core.exceptions import TransportError
from eporner_api.core.settings import reload_settings


class FakeTransport:
    """Transport gateway replaying queued responses and recording every call"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def get(self, endpoint, params):
        self.calls.append((endpoint, dict(params)))
        if not self.responses:
            raise TransportError("No response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def json_response(payload, content_type="application/json"):
    return RawResponse(
        status_code=200,
        headers={"content-type": content_type},
        body=json.dumps(payload).encode("utf-8")
    )


def text_response(body, content_type=None):
    headers = {"content-type": content_type} if content_type else {}
    return RawResponse(status_code=200, headers=headers, body=body.encode("utf-8"))


def video_record(video_id, title=None, **overrides):
    """Create a video record shaped like the API's JSON"""
    record = {
        "id": video_id,
        "title": title or f"Sample video {video_id}",
        "keywords": "sample, test, video",
        "views": 1500,
        "rate": 4.13,
        "url": f"https://www.eporner.com/video-{video_id}/sample/",
        "added": "2024-01-15 10:00:00",
        "length_sec": 754,
        "length_min": "12:34",
        "embed": f"https://www.eporner.com/embed/{video_id}/",
        "default_thumb": {
            "size": "medium",
            "width": 427,
            "height": 240,
            "src": f"https://static.eporner.com/thumbs/{video_id}/1_240.jpg"
        },
        "thumbs": [
            {
                "size": "medium",
                "width": 427,
                "height": 240,
                "src": f"https://static.eporner.com/thumbs/{video_id}/1_240.jpg"
            },
            {
                "size": "medium",
                "width": 427,
                "height": 240,
                "src": f"https://static.eporner.com/thumbs/{video_id}/2_240.jpg"
            }
        ]
    }
    record.update(overrides)
    return record


def search_page(video_ids, page=1, total_pages=1, per_page=30, total_count=None):
    """Create a search response payload for the given video IDs"""
    return {
        "count": len(video_ids),
        "start": (page - 1) * per_page,
        "per_page": per_page,
        "page": page,
        "time_ms": 12,
        "total_count": total_count if total_count is not None else len(video_ids),
        "total_pages": total_pages,
        "videos": [video_record(video_id) for video_id in video_ids]
    }


SEARCH_XML = """<?xml version="1.0" encoding="UTF-8"?>
<eporner-data>
  <count>2</count>
  <start>0</start>
  <per_page>30</per_page>
  <page>1</page>
  <time_ms>12</time_ms>
  <total_count>2</total_count>
  <total_pages>1</total_pages>
  <videos>
    <video>
      <id>abc123</id>
      <title>Sample video abc123</title>
      <keywords>sample, test, video</keywords>
      <views>1500</views>
      <rate>4.13</rate>
      <url>https://www.eporner.com/video-abc123/sample/</url>
      <added>2024-01-15 10:00:00</added>
      <length_sec>754</length_sec>
      <length_min>12:34</length_min>
      <embed>https://www.eporner.com/embed/abc123/</embed>
      <default_thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/abc123/1_240.jpg"/>
      <thumbs>
        <thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/abc123/1_240.jpg"/>
        <thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/abc123/2_240.jpg"/>
      </thumbs>
    </video>
    <video>
      <id>def456</id>
      <title>Sample video def456</title>
      <keywords>sample, test, video</keywords>
      <views>1500</views>
      <rate>4.13</rate>
      <url>https://www.eporner.com/video-def456/sample/</url>
      <added>2024-01-15 10:00:00</added>
      <length_sec>754</length_sec>
      <length_min>12:34</length_min>
      <embed>https://www.eporner.com/embed/def456/</embed>
      <default_thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/def456/1_240.jpg"/>
      <thumbs>
        <thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/def456/1_240.jpg"/>
        <thumb size="medium" width="427" height="240" src="https://static.eporner.com/thumbs/def456/2_240.jpg"/>
      </thumbs>
    </video>
  </videos>
</eporner-data>
"""


REMOVED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<removed>
  <video><id>gone1</id></video>
  <video><id>gone2</id></video>
</removed>
"""


@pytest.fixture
def sample_video_record():
    """Sample video record"""
    return video_record("abc123")


@pytest.fixture
def make_video_record():
    """Factory for video records"""
    return video_record


@pytest.fixture
def make_search_page():
    """Factory for search response payloads"""
    return search_page


@pytest.fixture
def make_json_response():
    """Factory for JSON raw responses"""
    return json_response


@pytest.fixture
def make_text_response():
    """Factory for raw responses with a text body"""
    return text_response


@pytest.fixture
def search_json_payload():
    """Search payload equivalent to SEARCH_XML"""
    return search_page(["abc123", "def456"])


@pytest.fixture
def search_xml():
    return SEARCH_XML


@pytest.fixture
def removed_xml():
    return REMOVED_XML


@pytest.fixture
def fake_transport():
    """Transport gateway with an empty response queue"""
    return FakeTransport()


@pytest.fixture
def client(fake_transport):
    """Client wired to the fake transport"""
    return EpornerClient(transport=fake_transport)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Setup test environment variables"""
    monkeypatch.setenv("EPORNER_API_KEY", "test_api_key")
    monkeypatch.setenv("EPORNER_BASE_URL", "https://api.test.local")
    monkeypatch.setenv("EPORNER_LOG_LEVEL", "DEBUG")
    reload_settings()
    yield
    monkeypatch.undo()
    reload_settings()
