"""Reference time used by the pipeline views."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.logger_config import get_logger

DEFAULT_TIMEZONE = "Europe/Paris"

logger = get_logger(__name__)


def pipeline_timezone(tz: Optional[str] = None) -> ZoneInfo:
    name = tz or os.getenv("PIPELINE_TIMEZONE", DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def get_now() -> datetime:
    """FastAPI dependency returning the current time in the agency's timezone."""
    return datetime.now(pipeline_timezone())
