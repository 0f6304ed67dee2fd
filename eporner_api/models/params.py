"""Request parameter models for the search and video lookup endpoints"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Union

from ..core import endpoints
from ..core.endpoints import Order, ResponseFormat, ThumbSize, wire_value
from ..core.exceptions import ValidationError


def _stringify(params: Mapping[str, Any]) -> Dict[str, str]:
    return {key: str(value) for key, value in params.items()}


@dataclass(frozen=True)
class SearchParams:
    """
    Parameters for the search endpoint.

    Instances are immutable: every ``with_*`` method, :meth:`next_page` and
    :meth:`with_page` return a new, unvalidated copy. Validation happens when
    the parameters are serialized, so an out-of-range page reached by paging
    arithmetic only fails once it is actually sent.
    """
    query: str = endpoints.DEFAULT_QUERY
    per_page: int = endpoints.DEFAULT_PER_PAGE
    page: int = endpoints.DEFAULT_PAGE
    thumbsize: Union[str, ThumbSize] = endpoints.DEFAULT_THUMBSIZE
    order: Union[str, Order] = endpoints.DEFAULT_ORDER
    gay: int = endpoints.DEFAULT_GAY
    lq: int = endpoints.DEFAULT_LQ
    format: Union[str, ResponseFormat] = endpoints.DEFAULT_FORMAT

    def validate(self) -> None:
        """
        Check every field against its value domain.

        Raises:
            ValidationError: For the first invalid field, checked in the order
                thumbsize, order, format, per_page, page, gay, lq
        """
        if not endpoints.is_valid_thumbsize(self.thumbsize):
            raise ValidationError.invalid_thumbsize(self.thumbsize, endpoints.VALID_THUMB_SIZES)

        if not endpoints.is_valid_order(self.order):
            raise ValidationError.invalid_order(self.order, endpoints.VALID_ORDERS)

        if not endpoints.is_valid_format(self.format):
            raise ValidationError.invalid_format(self.format, endpoints.VALID_FORMATS)

        if not endpoints.is_valid_per_page(self.per_page):
            raise ValidationError.invalid_per_page(self.per_page, endpoints.MAX_PER_PAGE)

        if not endpoints.is_valid_page(self.page):
            raise ValidationError.invalid_page(self.page, endpoints.MAX_PAGE)

        if not endpoints.is_valid_gay(self.gay):
            raise ValidationError.invalid_gay(self.gay, endpoints.VALID_GAY_OPTIONS)

        if not endpoints.is_valid_lq(self.lq):
            raise ValidationError.invalid_lq(self.lq, endpoints.VALID_LQ_OPTIONS)

    def to_dict(self) -> Dict[str, Any]:
        """Validate and return the parameters keyed by their API names"""
        self.validate()
        return {
            "query": self.query,
            "per_page": self.per_page,
            "page": self.page,
            "thumbsize": wire_value(self.thumbsize),
            "order": wire_value(self.order),
            "gay": self.gay,
            "lq": self.lq,
            "format": wire_value(self.format),
        }

    def to_query(self) -> Dict[str, str]:
        """Validate and return the parameters as query string values"""
        return _stringify(self.to_dict())

    def next_page(self) -> "SearchParams":
        return replace(self, page=self.page + 1)

    def with_page(self, page: int) -> "SearchParams":
        return replace(self, page=page)

    def with_query(self, query: str) -> "SearchParams":
        return replace(self, query=query)

    def with_per_page(self, per_page: int) -> "SearchParams":
        return replace(self, per_page=per_page)

    def with_thumbsize(self, thumbsize: Union[str, ThumbSize]) -> "SearchParams":
        return replace(self, thumbsize=thumbsize)

    def with_order(self, order: Union[str, Order]) -> "SearchParams":
        return replace(self, order=order)

    def with_gay(self, gay: int) -> "SearchParams":
        """Gay content filter: 0 = exclude, 1 = include, 2 = only gay"""
        return replace(self, gay=gay)

    def with_lq(self, lq: int) -> "SearchParams":
        """Low quality filter: 0 = exclude, 1 = include, 2 = only low quality"""
        return replace(self, lq=lq)

    def with_format(self, fmt: Union[str, ResponseFormat]) -> "SearchParams":
        return replace(self, format=fmt)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchParams":
        """Create parameters from API-named keys, defaulting any missing key"""
        return cls(
            query=data.get("query", endpoints.DEFAULT_QUERY),
            per_page=int(data.get("per_page", endpoints.DEFAULT_PER_PAGE)),
            page=int(data.get("page", endpoints.DEFAULT_PAGE)),
            thumbsize=data.get("thumbsize", endpoints.DEFAULT_THUMBSIZE),
            order=data.get("order", endpoints.DEFAULT_ORDER),
            gay=int(data.get("gay", endpoints.DEFAULT_GAY)),
            lq=int(data.get("lq", endpoints.DEFAULT_LQ)),
            format=data.get("format", endpoints.DEFAULT_FORMAT),
        )


@dataclass(frozen=True)
class VideoIdParams:
    """Parameters for the single video lookup endpoint"""
    thumbsize: Union[str, ThumbSize] = endpoints.DEFAULT_THUMBSIZE
    format: Union[str, ResponseFormat] = endpoints.DEFAULT_FORMAT

    def validate(self) -> None:
        if not endpoints.is_valid_thumbsize(self.thumbsize):
            raise ValidationError.invalid_thumbsize(self.thumbsize, endpoints.VALID_THUMB_SIZES)

        if not endpoints.is_valid_format(self.format):
            raise ValidationError.invalid_format(self.format, endpoints.VALID_FORMATS)

    def to_dict(self) -> Dict[str, Any]:
        self.validate()
        return {
            "thumbsize": wire_value(self.thumbsize),
            "format": wire_value(self.format),
        }

    def to_query(self, video_id: str) -> Dict[str, str]:
        """Validate and merge the video id into the query string values"""
        return _stringify({"id": video_id, **self.to_dict()})

    def with_thumbsize(self, thumbsize: Union[str, ThumbSize]) -> "VideoIdParams":
        return replace(self, thumbsize=thumbsize)

    def with_format(self, fmt: Union[str, ResponseFormat]) -> "VideoIdParams":
        return replace(self, format=fmt)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VideoIdParams":
        return cls(
            thumbsize=data.get("thumbsize", endpoints.DEFAULT_THUMBSIZE),
            format=data.get("format", endpoints.DEFAULT_FORMAT),
        )
