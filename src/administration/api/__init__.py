"""Administration domain API package."""

from administration.api.routes import audit_router, report_router, setting_router

__all__ = ["report_router", "setting_router", "audit_router"]
