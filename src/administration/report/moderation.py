"""Content reports: filing and review by administrators."""

import structlog
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.listing import everything, query

from administration.audit.trail import record_action
from administration.domain import administration
from administration.report.report import ReportedContent

logger = structlog.get_logger(__name__)


@administration.command(part_of="ReportedContent")
class ReportContent:
    reporter_id = Identifier(required=True)
    content_type = String(required=True, max_length=20)
    content_id = Identifier(required=True)
    reason = String(required=True, max_length=200)
    description = Text()


@administration.command(part_of="ReportedContent")
class ReviewReport:
    report_id = Identifier(required=True)
    status = String(required=True, max_length=20)  # "Resolved" or "Rejected"
    resolution = Text()
    reviewed_by = Identifier(required=True)


@administration.command_handler(part_of=ReportedContent)
class ModerationHandler:
    @handle(ReportContent)
    def report_content(self, command):
        report = ReportedContent.file(
            reporter_id=command.reporter_id,
            content_type=command.content_type,
            content_id=command.content_id,
            reason=command.reason,
            description=command.description,
        )
        current_domain.repository_for(ReportedContent).add(report)
        logger.info("Content reported", report_id=str(report.id), content_type=command.content_type)
        return str(report.id)

    @handle(ReviewReport)
    def review_report(self, command):
        repo = current_domain.repository_for(ReportedContent)
        report = repo.get(command.report_id)
        report.review(command.status, reviewed_by=command.reviewed_by, resolution=command.resolution)
        repo.add(report)

        record_action(
            "REPORT_REVIEWED",
            "ReportedContent",
            entity_id=report.id,
            user_id=command.reviewed_by,
            details={"status": command.status, "resolution": command.resolution},
        )


def list_reports(status=None) -> list[ReportedContent]:
    """Reports, newest first, optionally narrowed to one status."""
    return everything(query(ReportedContent, status=status).order_by("-created_at"))
