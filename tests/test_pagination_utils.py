import pytest

from invoice_dashboard.utils.pagination import (
    ELLIPSIS,
    build_pagination_args,
    generate_pagination,
    get_page,
    total_pages,
)


def test_get_page_defaults_to_first_page(app):
    with app.test_request_context("/"):
        assert get_page() == 1


@pytest.mark.parametrize("value", ["0", "-3", "abc"])
def test_get_page_rejects_invalid_values(app, value):
    with app.test_request_context(f"/?page={value}"):
        assert get_page() == 1


def test_get_page_with_custom_parameter(app):
    with app.test_request_context("/?invoice_page=4"):
        assert get_page("invoice_page") == 4


def test_total_pages():
    assert total_pages(0, 6) == 1
    assert total_pages(6, 6) == 1
    assert total_pages(7, 6) == 2
    assert total_pages(13, 6) == 3
    with pytest.raises(ValueError):
        total_pages(10, 0)


def test_generate_pagination_short_runs_are_listed():
    assert generate_pagination(1, 1) == [1]
    assert generate_pagination(4, 7) == [1, 2, 3, 4, 5, 6, 7]


def test_generate_pagination_near_start():
    assert generate_pagination(2, 10) == [1, 2, 3, ELLIPSIS, 9, 10]


def test_generate_pagination_near_end():
    assert generate_pagination(9, 10) == [1, 2, ELLIPSIS, 8, 9, 10]


def test_generate_pagination_middle():
    assert generate_pagination(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]


def test_build_pagination_args_excludes_page(app):
    with app.test_request_context("/?page=3&query=lee&status=paid"):
        args = build_pagination_args()
    assert args == {"query": "lee", "status": "paid"}


def test_build_pagination_args_preserves_list_values(app):
    with app.test_request_context("/?page=2&status=paid&status=pending"):
        args = build_pagination_args()
    assert args["status"] == ["paid", "pending"]


def test_build_pagination_args_with_custom_page_param(app):
    with app.test_request_context("/?invoice_page=4&page=2"):
        args = build_pagination_args(page_param="invoice_page")
    assert args == {"page": "2"}
