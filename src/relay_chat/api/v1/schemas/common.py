from __future__ import annotations

from typing import Any

import nh3


def strip_markup(value: Any) -> Any:
    """Drop every HTML tag (and script/style bodies) from user-supplied text.

    Non-string input is passed through for pydantic to reject. Characters
    that are significant in HTML come back entity-escaped.
    """
    if not isinstance(value, str):
        return value
    return nh3.clean(value, tags=set()).strip()
