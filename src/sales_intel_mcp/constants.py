from __future__ import annotations

import os
from enum import Enum

# API base URLs (overridable for sandboxes and tests)
GONG_API_BASE_URL = os.getenv("GONG_API_BASE_URL", "https://api.gong.io/v2")
ZOOMINFO_API_BASE_URL = os.getenv("ZOOMINFO_API_BASE_URL", "https://api.zoominfo.com")
CLAY_API_BASE_URL = os.getenv("CLAY_API_BASE_URL", "https://api.clay.com/v3")
LINKEDIN_API_BASE_URL = os.getenv("LINKEDIN_API_BASE_URL", "https://api.linkedin.com")

LINKEDIN_API_VERSION = "202401"

# Response limits
CHARACTER_LIMIT = 25000
TRUNCATION_RESERVE = 200
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
LINKEDIN_MAX_PAGE_SIZE = 50

# Timeouts (seconds)
API_TIMEOUT = 30.0

# ZoomInfo JWTs live 60 minutes; refresh 5 minutes early.
ZOOMINFO_TOKEN_TTL_S = 60 * 60
ZOOMINFO_TOKEN_MARGIN_S = 5 * 60


class ResponseFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"
