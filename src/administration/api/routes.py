"""FastAPI endpoints for the Administration domain."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain
from shared.auth import ADMIN_ROLES, Actor, current_actor, require_roles

from administration.api.schemas import (
    AuditLogResponse,
    ReportContentRequest,
    ReportIdResponse,
    ReportResponse,
    ReviewReportRequest,
    SettingIdResponse,
    SettingResponse,
    StatusResponse,
    UpdateSettingRequest,
)
from administration.audit.trail import DEFAULT_LIMIT, recent_entries
from administration.report.moderation import ReportContent, ReviewReport, list_reports
from administration.setting.management import UpdateSystemSetting, list_settings

report_router = APIRouter(prefix="/reports", tags=["reports"])
setting_router = APIRouter(prefix="/settings", tags=["settings"])
audit_router = APIRouter(prefix="/audit-logs", tags=["audit"])

_admin = require_roles(*ADMIN_ROLES)


# --- Reports ---


@report_router.post("", status_code=201, response_model=ReportIdResponse)
async def report_content(body: ReportContentRequest, actor: Actor = Depends(current_actor)) -> ReportIdResponse:
    command = ReportContent(
        reporter_id=actor.user_id,
        content_type=body.content_type,
        content_id=body.content_id,
        reason=body.reason,
        description=body.description,
    )
    result = current_domain.process(command, asynchronous=False)
    return ReportIdResponse(report_id=result)


@report_router.get("", response_model=list[ReportResponse])
async def get_reports(status: str | None = None, actor: Actor = Depends(_admin)) -> list[ReportResponse]:
    return [
        ReportResponse(
            report_id=str(r.id),
            reporter_id=str(r.reporter_id),
            content_type=r.content_type,
            content_id=str(r.content_id),
            reason=r.reason,
            description=r.description,
            status=r.status,
            resolution=r.resolution,
            reviewed_by=str(r.reviewed_by) if r.reviewed_by else None,
            reviewed_at=r.reviewed_at,
            created_at=r.created_at,
        )
        for r in list_reports(status=status)
    ]


@report_router.put("/{report_id}/review", response_model=StatusResponse)
async def review_report(report_id: str, body: ReviewReportRequest, actor: Actor = Depends(_admin)) -> StatusResponse:
    command = ReviewReport(
        report_id=report_id,
        status=body.status,
        resolution=body.resolution,
        reviewed_by=actor.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Settings ---


@setting_router.get("", response_model=list[SettingResponse])
async def get_settings(actor: Actor = Depends(_admin)) -> list[SettingResponse]:
    return [
        SettingResponse(
            setting_id=str(s.id),
            key=s.key,
            value=s.value,
            description=s.description,
            category=s.category,
            updated_by=str(s.updated_by) if s.updated_by else None,
            updated_at=s.updated_at,
        )
        for s in list_settings()
    ]


@setting_router.put("/{key}", response_model=SettingIdResponse)
async def update_setting(key: str, body: UpdateSettingRequest, actor: Actor = Depends(_admin)) -> SettingIdResponse:
    command = UpdateSystemSetting(
        key=key,
        value=body.value,
        description=body.description,
        category=body.category,
        updated_by=actor.user_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return SettingIdResponse(setting_id=result)


# --- Audit trail ---


@audit_router.get("", response_model=list[AuditLogResponse])
async def get_audit_logs(
    action: str | None = None,
    entity: str | None = None,
    user_id: str | None = None,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    actor: Actor = Depends(_admin),
) -> list[AuditLogResponse]:
    return [
        AuditLogResponse(
            audit_id=str(entry.id),
            user_id=str(entry.user_id) if entry.user_id else None,
            action=entry.action,
            entity=entry.entity,
            entity_id=str(entry.entity_id) if entry.entity_id else None,
            details=entry.detail_dict,
            created_at=entry.created_at,
        )
        for entry in recent_entries(action=action, entity=entity, user_id=user_id, limit=limit)
    ]
