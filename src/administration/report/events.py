"""Domain events raised by the ReportedContent aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from administration.domain import administration


@administration.event(part_of="ReportedContent")
class ContentReported:
    __version__ = 1

    report_id = Identifier(required=True)
    reporter_id = Identifier(required=True)
    content_type = String(required=True)
    content_id = Identifier(required=True)
    reason = String(required=True)
    reported_at = DateTime(required=True)


@administration.event(part_of="ReportedContent")
class ReportReviewed:
    __version__ = 1

    report_id = Identifier(required=True)
    status = String(required=True)
    resolution = Text()
    reviewed_by = Identifier(required=True)
    reviewed_at = DateTime(required=True)
