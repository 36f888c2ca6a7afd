"""
Parameter URL filter.

Coarse match: a "?" followed somewhere by "key=value". Query strings are not
parsed, so "?a&b=1" and "?x=1&y" both qualify while "?flag" does not.
"""

import re
from typing import Iterable, List

PARAM_PATTERN = re.compile(r"\?.+=.+")


def has_params(url: str) -> bool:
    """Check if a URL carries at least one key=value query parameter."""
    return PARAM_PATTERN.search(url) is not None


def filter_param_urls(urls: Iterable[str]) -> List[str]:
    """Keep URLs with query parameters, preserving order and duplicates."""
    return [url for url in urls if has_params(url)]
