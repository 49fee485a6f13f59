# This file defines the response schema for the health endpoint.
# The status field carries "ok" or "degraded"; the HTTP status code is always 200.

from __future__ import annotations

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    message: str
