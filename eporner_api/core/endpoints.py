"""Eporner API v2 endpoints, default values and accepted value domains"""

from enum import Enum
from typing import Any, Dict, Tuple


BASE_URL = "https://www.eporner.com"

# API v2 endpoints
ENDPOINT_SEARCH = "/api/v2/video/search/"
ENDPOINT_ID = "/api/v2/video/id/"
ENDPOINT_REMOVED = "/api/v2/video/removed/"


class ThumbSize(str, Enum):
    """Thumbnail sizes served by the API"""
    SMALL = "small"
    MEDIUM = "medium"
    BIG = "big"


class Order(str, Enum):
    """Sort orders accepted by the search endpoint"""
    LATEST = "latest"
    LONGEST = "longest"
    SHORTEST = "shortest"
    TOP_RATED = "top-rated"
    MOST_POPULAR = "most-popular"
    TOP_WEEKLY = "top-weekly"
    TOP_MONTHLY = "top-monthly"


class ResponseFormat(str, Enum):
    """Response encodings the API can produce"""
    JSON = "json"
    XML = "xml"
    TXT = "txt"


# Default parameter values
DEFAULT_QUERY = "all"
DEFAULT_PER_PAGE = 30
DEFAULT_PAGE = 1
DEFAULT_THUMBSIZE = ThumbSize.MEDIUM.value
DEFAULT_ORDER = Order.LATEST.value
DEFAULT_GAY = 0
DEFAULT_LQ = 1
DEFAULT_FORMAT = ResponseFormat.JSON.value

# Maximum values
MAX_PER_PAGE = 1000
MAX_PAGE = 1000000

# Closed value domains
VALID_THUMB_SIZES: Tuple[str, ...] = tuple(size.value for size in ThumbSize)
VALID_ORDERS: Tuple[str, ...] = tuple(order.value for order in Order)
# txt is only served by the removed-videos endpoint
VALID_FORMATS: Tuple[str, ...] = (ResponseFormat.JSON.value, ResponseFormat.XML.value)
VALID_REMOVED_FORMATS: Tuple[str, ...] = tuple(fmt.value for fmt in ResponseFormat)
VALID_GAY_OPTIONS: Tuple[int, ...] = (0, 1, 2)
VALID_LQ_OPTIONS: Tuple[int, ...] = (0, 1, 2)

THUMB_DIMENSIONS: Dict[str, Dict[str, int]] = {
    ThumbSize.SMALL.value: {"width": 190, "height": 152},
    ThumbSize.MEDIUM.value: {"width": 427, "height": 240},
    ThumbSize.BIG.value: {"width": 640, "height": 360},
}


def get_url(endpoint: str, base_url: str = BASE_URL) -> str:
    """Get the full API URL for a given endpoint"""
    return base_url.rstrip("/") + endpoint


def wire_value(value: Any) -> Any:
    """Unwrap enum members to their raw API value"""
    return value.value if isinstance(value, Enum) else value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_thumbsize(thumbsize: Any) -> bool:
    return wire_value(thumbsize) in VALID_THUMB_SIZES


def is_valid_order(order: Any) -> bool:
    return wire_value(order) in VALID_ORDERS


def is_valid_format(fmt: Any) -> bool:
    return wire_value(fmt) in VALID_FORMATS


def is_valid_removed_format(fmt: Any) -> bool:
    return wire_value(fmt) in VALID_REMOVED_FORMATS


def is_valid_per_page(per_page: Any) -> bool:
    return _is_int(per_page) and 1 <= per_page <= MAX_PER_PAGE


def is_valid_page(page: Any) -> bool:
    return _is_int(page) and 1 <= page <= MAX_PAGE


def is_valid_gay(gay: Any) -> bool:
    return _is_int(gay) and gay in VALID_GAY_OPTIONS


def is_valid_lq(lq: Any) -> bool:
    return _is_int(lq) and lq in VALID_LQ_OPTIONS
