import pytest

from reportsort.config import settings
from reportsort.config.options import SortOptions
from reportsort.domain.models import Direction
from reportsort.parsing.errors import ConfigurationError


def test_defaults():
    opts = SortOptions()
    assert opts.order is Direction.ASC
    assert opts.order_id is None
    assert opts.date_format == settings.DEFAULT_DATE_FORMAT
    assert opts.alternating_row_marker == "altReportRow"
    assert opts.affordance_marker == "imgArrow"
    assert opts.affordance_loading_marker == "imgArrowLoading"
    assert opts.on_pre_sort() is None


def test_camel_case_and_legacy_names():
    hook = lambda: None  # noqa: E731
    opts = SortOptions.from_mapping(
        {
            "order": "DESC",
            "orderID": "amount",
            "dateFormat": "YYYY-MM-DD",
            "cssAlternatingClass": "",
            "cssArrowClass": "arrow",
            "onpostsort": hook,
        }
    )
    assert opts.order is Direction.DESC
    assert opts.order_id == "amount"
    assert opts.date_format == "YYYY-MM-DD"
    assert not opts.alternating_enabled
    assert opts.affordance_marker == "arrow"
    assert opts.on_post_sort is hook


def test_keyword_overrides_win():
    opts = SortOptions.from_mapping({"order": "asc"}, order="desc", debounceMs=5)
    assert opts.order is Direction.DESC
    assert opts.debounce_ms == 5


@pytest.mark.parametrize(
    "mapping",
    [
        {"colour": "red"},
        {"order": "sideways"},
        {"order": "none"},
        {"onPreSort": "not callable"},
        {"debounce_ms": -1},
        {"debounce_ms": "soon"},
    ],
)
def test_invalid_options_raise(mapping):
    with pytest.raises(ConfigurationError):
        SortOptions.from_mapping(mapping)


def test_merged_copy():
    base = SortOptions(order_id="a")
    other = base.merged(orderID="b")
    assert base.order_id == "a"
    assert other.order_id == "b"


def test_none_hook_becomes_noop():
    opts = SortOptions(on_pre_sort=None)
    assert opts.on_pre_sort() is None
