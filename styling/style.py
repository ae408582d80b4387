"""
style.py — Route Style Model & Parser
=====================================
What a renderer needs to draw the final route, plus the defensive parser
for free-text style advice.

Advice looks like:

    - Color: #20B2AA (Light Sea Green)
    - Line thickness: 3 pixels
    - Special effects: Add a subtle glow effect to the line.

but it comes from a language model, so anything goes.  The parser picks
out what it recognises and keeps defaults for the rest.
"""

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from graph import Graph

logger = logging.getLogger(__name__)

TEAL = "#20B2AA"

COMPLEXITY_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class RouteStyle:
    color:     str  = TEAL
    thickness: int  = 3
    glow:      bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Used whenever advice is unavailable or unusable.
DEFAULT_STYLE = RouteStyle(color=TEAL, thickness=4, glow=True)


@dataclass(frozen=True)
class StyleRequest:
    map_width:  int
    map_height: int
    path:       Sequence[str]
    complexity: str  = "medium"
    occlusion:  bool = False

    def __post_init__(self):
        if self.complexity not in COMPLEXITY_LEVELS:
            raise ValueError(
                f"complexity must be one of {COMPLEXITY_LEVELS}, got {self.complexity!r}"
            )
        object.__setattr__(self, "path", tuple(self.path))

    @property
    def path_description(self) -> str:
        return " -> ".join(self.path)


def complexity_label(graph: Graph) -> str:
    """Coarse size bucket for the prompt: < 15 edges low, < 40 medium."""
    edges = graph.edge_count()
    if edges < 15:
        return "low"
    if edges < 40:
        return "medium"
    return "high"


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
_HEX_RE   = re.compile(r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})\b")
_NAME_RE  = re.compile(r"[A-Za-z]+(?: [A-Za-z]+)*")
_PAREN_RE = re.compile(r"\([^)]*\)")
_INT_RE   = re.compile(r"\d+")
_ENTRY_RE = re.compile(r"[\n;]")


def _parse_color(value: str) -> Optional[str]:
    match = _HEX_RE.search(value)
    if match:
        return match.group(0)
    # "Light Sea Green (calm)" -> "lightseagreen", the CSS keyword form
    name = " ".join(_PAREN_RE.sub("", value).rstrip(". ").split())
    if not _NAME_RE.fullmatch(name):
        return None
    return name.replace(" ", "").lower()


def parse_style(text: Optional[str]) -> RouteStyle:
    """
    Turn free-text style advice into a RouteStyle.

    Entries are "key: value", separated by newlines or ';'.  Starts from
    RouteStyle() and overrides what it finds.  Returns DEFAULT_STYLE if
    the text is empty or nothing in it can be used.
    """
    if not text or not text.strip():
        return DEFAULT_STYLE

    color, thickness, glow = RouteStyle.color, RouteStyle.thickness, RouteStyle.glow
    recognised = False

    for entry in _ENTRY_RE.split(text):
        if ":" not in entry:
            continue
        key, value = entry.split(":", 1)
        key = key.strip().lstrip("-*• ").strip().lower()
        value = value.strip()

        if key in ("color", "colour"):
            parsed = _parse_color(value)
            if parsed:
                color, recognised = parsed, True
        elif key in ("line thickness", "thickness", "line width", "stroke width"):
            number = _INT_RE.search(value)
            if number and int(number.group(0)) > 0:
                thickness, recognised = int(number.group(0)), True
        elif key in ("special effects", "effects", "effect"):
            recognised = True
            glow = "glow" in value.lower()

    if not recognised:
        logger.warning("Could not parse route style advice, using default: %r", text[:200])
        return DEFAULT_STYLE
    return RouteStyle(color=color, thickness=thickness, glow=glow)
