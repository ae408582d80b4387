"""
styling/
--------
Optional advice on how to draw the final route.  Nothing in graph/ or
pathfinding/ depends on this package.

    from styling import get_style_advisor, StyleRequest
"""

from styling.style import (
    DEFAULT_STYLE,
    RouteStyle,
    StyleRequest,
    complexity_label,
    parse_style,
)
from styling.advisors import (
    DefaultStyleAdvisor,
    LLMStyleAdvisor,
    StyleAdvisor,
    get_style_advisor,
)

__all__ = [
    "DEFAULT_STYLE",
    "RouteStyle",
    "StyleRequest",
    "complexity_label",
    "parse_style",
    "DefaultStyleAdvisor",
    "LLMStyleAdvisor",
    "StyleAdvisor",
    "get_style_advisor",
]
