"""
Response bodies shared by the resource routers.
"""

from __future__ import annotations

from pydantic import BaseModel

# Largest BIGSERIAL primary key; path ids above it are rejected before any query.
MAX_ID = 9223372036854775807


class UpdatedResponse(BaseModel):
    ok: bool = True
    id: int


class DeletedResponse(BaseModel):
    ok: bool = True


class HealthResponse(BaseModel):
    ok: bool = True
    msg: str
