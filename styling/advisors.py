"""
Route style advisors.

A StyleAdvisor answers one question: how should the final route be drawn
so it stands out on this map?  Two implementations:

- DefaultStyleAdvisor: always the fixed teal style.  No I/O.
- LLMStyleAdvisor: asks a text-generation model through an
  OpenRouter-compatible chat completions API and parses the reply.

The LLM advisor never raises.  Any failure (no key, timeout, HTTP error,
empty or unparseable reply) is logged and answered with DEFAULT_STYLE.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

import config
from styling.style import DEFAULT_STYLE, RouteStyle, StyleRequest, parse_style

logger = logging.getLogger(__name__)


class StyleAdvisor(Protocol):
    """Port for route styling advice."""

    name: str

    def advise(self, request: StyleRequest) -> RouteStyle:
        """Return the style to draw `request.path` with."""
        ...


class DefaultStyleAdvisor:
    """Deterministic advisor: the same teal, 4 px, glowing line every time."""

    name = "default"

    def advise(self, request: StyleRequest) -> RouteStyle:
        return DEFAULT_STYLE


PROMPT_TEMPLATE = """You are a cartographer making city maps easy to read. A shortest route has to be drawn on a map so that it is clearly visible, even where the map is busy or the route passes close to other points.

- Map size: {width} x {height} pixels.
- Route: {path}.
- Road graph complexity: {complexity}.
- The route is {occlusion} to be hidden by other points on the map.

Give rendering instructions for the route: colour, line thickness and any special effect (dashed line, glow, ...). Be short and specific, one item per line, in this format:

- Color: #20B2AA (Light Sea Green)
- Line thickness: 3 pixels
- Special effects: Add a subtle glow effect to the line.

Rendering instructions:"""


class LLMStyleAdvisor:
    """Style advice from a chat-completion model."""

    name = "llm"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: float = 0.2,
    ) -> None:
        self._api_key = api_key if api_key is not None else config.OPENROUTER_API_KEY
        self._base_url = (base_url or config.OPENROUTER_BASE_URL).rstrip("/")
        self._model = model or config.STYLE_MODEL
        self._timeout = timeout if timeout is not None else config.STYLE_TIMEOUT
        self._temperature = temperature

    def build_prompt(self, request: StyleRequest) -> str:
        return PROMPT_TEMPLATE.format(
            width=request.map_width,
            height=request.map_height,
            path=request.path_description or "(empty)",
            complexity=request.complexity,
            occlusion="likely" if request.occlusion else "unlikely",
        )

    def advise(self, request: StyleRequest) -> RouteStyle:
        try:
            text = self._call_model(self.build_prompt(request))
        except (requests.RequestException, RuntimeError, ValueError) as exc:
            logger.warning("Route style advice unavailable, using default style: %s", exc)
            return DEFAULT_STYLE
        return parse_style(text)

    def _call_model(self, prompt: str) -> str:
        """
        POST the prompt and return the reply text.

        Raises:
            RuntimeError: no API key, non-200 status, error body or empty reply
            requests.RequestException: transport failure / timeout
        """
        if not self._api_key:
            raise RuntimeError("OPENROUTER_API_KEY not set")

        response = requests.post(
            f"{self._base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self._model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": self._temperature,
                "max_tokens": 200,
            },
            timeout=self._timeout,
        )

        if response.status_code != 200:
            raise RuntimeError(f"Style API error {response.status_code}: {response.text[:200]}")

        data = response.json()
        if not isinstance(data, dict):
            raise RuntimeError(f"Style API returned {type(data).__name__}, expected an object")
        if "error" in data:
            error = data["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise RuntimeError(f"Style API error in body: {message[:200]}")

        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices:
            raise RuntimeError("Style API returned no choices")
        choice = choices[0]
        if not isinstance(choice, dict):
            raise RuntimeError("Style API returned a malformed choice")
        message = choice.get("message") or {}
        if not isinstance(message, dict):
            raise RuntimeError("Style API returned a malformed message")
        content = message.get("content") or choice.get("text") or ""
        if not isinstance(content, str) or not content.strip():
            raise RuntimeError("Style API returned empty content")

        logger.debug("style advice from %s: %r", self._model, content[:200])
        return content.strip()


def get_style_advisor(provider: Optional[str] = None) -> StyleAdvisor:
    """
    Advisor selected by `provider` (or config.STYLE_PROVIDER).

    "llm" without an API key falls back to the default advisor.
    """
    provider = (provider or config.STYLE_PROVIDER).lower()
    if provider == "llm":
        if config.OPENROUTER_API_KEY:
            return LLMStyleAdvisor()
        logger.warning("ROUTE_STYLE_PROVIDER=llm but OPENROUTER_API_KEY is not set; using default style")
        return DefaultStyleAdvisor()
    if provider != "default":
        logger.warning("Unknown style provider %r; using default style", provider)
    return DefaultStyleAdvisor()
