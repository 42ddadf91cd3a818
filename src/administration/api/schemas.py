"""Pydantic request/response schemas for the Administration API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class ReportContentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "content_type": "Product",
                    "content_id": "p-1",
                    "reason": "Counterfeit",
                    "description": "Logo does not match the brand's official mark.",
                }
            ]
        }
    }

    content_type: str = Field(..., max_length=20)
    content_id: str
    reason: str = Field(..., max_length=200)
    description: str | None = None


class ReviewReportRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "Resolved", "resolution": "Listing removed"}]}}

    status: str = Field(..., max_length=20)
    resolution: str | None = None


class UpdateSettingRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"value": "true", "description": "Accept new vendor sign-ups", "category": "vendors"}]
        }
    }

    value: str
    description: str | None = None
    category: str | None = Field(None, max_length=50)


# --- Response Schemas ---


class ReportIdResponse(BaseModel):
    report_id: str


class SettingIdResponse(BaseModel):
    setting_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ReportResponse(BaseModel):
    report_id: str
    reporter_id: str
    content_type: str
    content_id: str
    reason: str
    description: str | None = None
    status: str
    resolution: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None


class SettingResponse(BaseModel):
    setting_id: str
    key: str
    value: str
    description: str | None = None
    category: str
    updated_by: str | None = None
    updated_at: datetime | None = None


class AuditLogResponse(BaseModel):
    audit_id: str
    user_id: str | None = None
    action: str
    entity: str
    entity_id: str | None = None
    details: dict = {}
    created_at: datetime | None = None
