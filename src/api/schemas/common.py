# This file defines shared schema pieces reused by multiple API endpoints.
# It keeps the error payload shape consistent across every failure path.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime
