"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Dict, List, Union

from flask import request

ELLIPSIS = "..."

PageItem = Union[int, str]


def get_page(param: str = "page") -> int:
    """Return the requested page number from the query string.

    Missing, malformed and non-positive values fall back to ``1``.
    """

    value = request.args.get(param, type=int)
    if value is None or value < 1:
        return 1
    return value


def total_pages(count: int, per_page: int) -> int:
    """Return the number of pages needed for ``count`` rows."""

    if per_page < 1:
        raise ValueError("per_page must be positive")
    return max(1, -(-count // per_page))


def generate_pagination(current_page: int, page_count: int) -> List[PageItem]:
    """Return the page links to render, collapsing long runs into ``...``.

    Seven pages or fewer are listed in full.  Otherwise the first and last
    pages stay visible along with the neighbourhood of ``current_page``.
    """

    if page_count <= 7:
        return list(range(1, page_count + 1))
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, page_count - 1, page_count]
    if current_page >= page_count - 2:
        return [1, 2, ELLIPSIS, page_count - 2, page_count - 1, page_count]
    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        page_count,
    ]


def build_pagination_args(
    *, page_param: str = "page"
) -> Dict[str, Union[str, List[str]]]:
    """Assemble the current query arguments for pagination links.

    Parameters
    ----------
    page_param:
        Name of the page number query parameter to exclude.

    Returns
    -------
    dict
        Mapping of query parameter names to values suitable for ``url_for``.
    """

    args: Dict[str, Union[str, List[str]]] = {}
    for key, values in request.args.lists():
        if key == page_param or not values:
            continue
        if len(values) == 1:
            args[key] = values[0]
        else:
            args[key] = values
    return args
