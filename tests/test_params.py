"""Tests for request parameter models"""

import dataclasses
import pytest

from eporner_api.core import endpoints
from eporner_api.core.endpoints import Order, ThumbSize
from eporner_api.core.exceptions import ValidationError
from eporner_api.models.params import SearchParams, VideoIdParams


class TestSearchParams:
    """Test search parameter validation and serialization"""

    def test_default_values(self):
        """Test defaults match the API defaults"""
        params = SearchParams()

        assert params.query == "all"
        assert params.per_page == 30
        assert params.page == 1
        assert params.thumbsize == "medium"
        assert params.order == "latest"
        assert params.gay == 0
        assert params.lq == 1
        assert params.format == "json"

    def test_to_dict(self):
        """Test serialization keeps values and uses API names"""
        params = SearchParams(query="teen", per_page=100, page=2, thumbsize="big",
                              order="most-popular", gay=1, lq=0)

        assert params.to_dict() == {
            "query": "teen",
            "per_page": 100,
            "page": 2,
            "thumbsize": "big",
            "order": "most-popular",
            "gay": 1,
            "lq": 0,
            "format": "json",
        }

    def test_to_query_stringifies_values(self):
        """Test wire encoding stringifies every value"""
        query = SearchParams(per_page=50, thumbsize=ThumbSize.SMALL, order=Order.TOP_RATED).to_query()

        assert query["per_page"] == "50"
        assert query["page"] == "1"
        assert query["thumbsize"] == "small"
        assert query["order"] == "top-rated"
        assert all(isinstance(value, str) for value in query.values())

    def test_validate_with_valid_params(self):
        """Test valid parameters pass validation"""
        SearchParams().validate()
        SearchParams(per_page=1000, page=1000000, gay=2, lq=2, format="xml").validate()

    @pytest.mark.parametrize("field,value", [
        ("thumbsize", "huge"),
        ("order", "oldest"),
        ("format", "txt"),
        ("per_page", 0),
        ("per_page", 1001),
        ("page", 0),
        ("page", 1000001),
        ("gay", 3),
        ("lq", -1),
    ])
    def test_validate_rejects_out_of_domain_value(self, field, value):
        """Test each field outside its domain raises naming that field"""
        params = dataclasses.replace(SearchParams(), **{field: value})

        with pytest.raises(ValidationError) as exc_info:
            params.validate()

        assert exc_info.value.field == field
        assert exc_info.value.value == value

    def test_validation_reports_first_violation_in_field_order(self):
        """Test only the first violation is reported"""
        params = SearchParams(order="oldest", per_page=0, lq=9)

        with pytest.raises(ValidationError) as exc_info:
            params.validate()
        assert exc_info.value.field == "order"

        params = params.with_order("latest")
        with pytest.raises(ValidationError) as exc_info:
            params.validate()
        assert exc_info.value.field == "per_page"

    def test_error_messages_describe_domain(self):
        """Test messages list the expected values or range"""
        with pytest.raises(ValidationError, match="Valid values are: latest, longest"):
            SearchParams(order="oldest").validate()

        with pytest.raises(ValidationError, match="Valid range is: 1-1000"):
            SearchParams(per_page=5000).validate()

    def test_to_dict_validates(self):
        """Test serialization never returns invalid parameters"""
        with pytest.raises(ValidationError, match="thumbsize"):
            SearchParams(thumbsize="huge").to_dict()

        with pytest.raises(ValidationError):
            SearchParams(page=0).to_query()

    def test_next_page_returns_new_instance(self):
        """Test next_page increments the page without touching the source"""
        params = SearchParams(query="cats", page=3, per_page=10)
        following = params.next_page()

        assert following.page == 4
        assert params.page == 3
        assert following is not params
        assert dataclasses.replace(following, page=3) == params

    def test_with_page(self):
        """Test with_page sets an explicit page"""
        params = SearchParams()
        fifth = params.with_page(5)

        assert fifth.page == 5
        assert params.page == 1

    def test_paging_does_not_validate(self):
        """Test an out-of-range page only fails when serialized"""
        params = SearchParams(page=endpoints.MAX_PAGE).next_page()

        assert params.page == endpoints.MAX_PAGE + 1
        with pytest.raises(ValidationError, match="page"):
            params.to_query()

    def test_with_field_constructors(self):
        """Test every with_* constructor returns a modified copy"""
        base = SearchParams()
        params = (
            base.with_query("dogs")
            .with_per_page(5)
            .with_thumbsize("big")
            .with_order("longest")
            .with_gay(2)
            .with_lq(0)
            .with_format("xml")
        )

        assert params == SearchParams(query="dogs", per_page=5, thumbsize="big",
                                      order="longest", gay=2, lq=0, format="xml")
        assert base == SearchParams()

    def test_instances_are_immutable(self):
        """Test fields cannot be reassigned"""
        params = SearchParams()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.page = 2

    def test_from_dict(self):
        """Test creation from API-named keys with defaults for the rest"""
        params = SearchParams.from_dict({"query": "x", "per_page": "15", "order": "top-monthly"})

        assert params.query == "x"
        assert params.per_page == 15
        assert params.order == "top-monthly"
        assert params.page == 1
        assert params.lq == 1


class TestVideoIdParams:
    """Test video lookup parameters"""

    def test_defaults_and_to_dict(self):
        assert VideoIdParams().to_dict() == {"thumbsize": "medium", "format": "json"}

    def test_to_query_merges_id(self):
        query = VideoIdParams(thumbsize="big").to_query("abc123")
        assert query == {"id": "abc123", "thumbsize": "big", "format": "json"}

    def test_validation_order(self):
        """Test thumbsize is checked before format"""
        with pytest.raises(ValidationError) as exc_info:
            VideoIdParams(thumbsize="huge", format="txt").validate()
        assert exc_info.value.field == "thumbsize"

        with pytest.raises(ValidationError) as exc_info:
            VideoIdParams(format="txt").validate()
        assert exc_info.value.field == "format"

    def test_with_and_from_dict(self):
        params = VideoIdParams.from_dict({"format": "xml"}).with_thumbsize("small")
        assert params == VideoIdParams(thumbsize="small", format="xml")
