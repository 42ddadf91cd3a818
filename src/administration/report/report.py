"""ReportedContent aggregate: a user's complaint about a listing, store or review.

State Machine:
    PENDING → RESOLVED | REJECTED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from administration.domain import administration
from administration.report.events import ContentReported, ReportReviewed


class ReportStatus(Enum):
    PENDING = "Pending"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"


class ContentType(Enum):
    PRODUCT = "Product"
    STORE = "Store"
    COLLECTION = "Collection"
    USER = "User"


@administration.aggregate
class ReportedContent:
    reporter_id = Identifier(required=True)
    content_type = String(required=True, choices=ContentType)
    content_id = Identifier(required=True)
    reason = String(required=True, max_length=200)
    description = Text()
    status = String(choices=ReportStatus, default=ReportStatus.PENDING.value)
    resolution = Text()
    reviewed_by = Identifier()
    reviewed_at = DateTime()
    created_at = DateTime()

    @classmethod
    def file(cls, reporter_id, content_type, content_id, reason, description=None):
        now = datetime.now(UTC)
        report = cls(
            reporter_id=str(reporter_id),
            content_type=content_type,
            content_id=str(content_id),
            reason=reason,
            description=description,
            created_at=now,
        )
        report.raise_(
            ContentReported(
                report_id=str(report.id),
                reporter_id=str(reporter_id),
                content_type=content_type,
                content_id=str(content_id),
                reason=reason,
                reported_at=now,
            )
        )
        return report

    def review(self, status, reviewed_by, resolution=None):
        if self.status != ReportStatus.PENDING.value:
            raise ValidationError({"status": ["Only pending reports can be reviewed"]})
        if status not in (ReportStatus.RESOLVED.value, ReportStatus.REJECTED.value):
            raise ValidationError({"status": [f"A review must resolve or reject the report, not {status}"]})

        now = datetime.now(UTC)
        self.status = status
        self.resolution = resolution
        self.reviewed_by = str(reviewed_by)
        self.reviewed_at = now
        self.raise_(
            ReportReviewed(
                report_id=str(self.id),
                status=status,
                resolution=resolution,
                reviewed_by=str(reviewed_by),
                reviewed_at=now,
            )
        )
