"""
Configuration for the route explainer.

All tunables live here.  Values come from the environment (a .env file
is loaded first); API keys are never hardcoded.
"""

import os
import secrets

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Map
# =============================================================================

# Sample map served by the API (see graph/samples.py)
DEFAULT_MAP = os.environ.get("ROUTE_MAP", "bengaluru")

# Canvas size the front end draws the map into
MAP_WIDTH = int(os.environ.get("ROUTE_MAP_WIDTH", "800"))
MAP_HEIGHT = int(os.environ.get("ROUTE_MAP_HEIGHT", "900"))

# =============================================================================
# Playback
# =============================================================================

# One of playback.SPEED_PRESETS
DEFAULT_SPEED = os.environ.get("ROUTE_SPEED", "medium")

# =============================================================================
# Route styling
# =============================================================================

# "default" (fixed teal style) or "llm" (ask a text-generation model)
STYLE_PROVIDER = os.environ.get("ROUTE_STYLE_PROVIDER", "default").lower()

# OpenRouter-compatible chat completions endpoint
OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = os.environ.get("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")

STYLE_MODEL = os.environ.get("ROUTE_STYLE_MODEL", "openai/gpt-4o-mini")

# Seconds before the style request is abandoned
STYLE_TIMEOUT = float(os.environ.get("ROUTE_STYLE_TIMEOUT", "15"))

# =============================================================================
# Web app
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

SECRET_KEY = os.environ.get("FLASK_SECRET_KEY") or secrets.token_hex(32)
