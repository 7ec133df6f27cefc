"""Domain layer for finboard application."""

_SERVICES = {
    "TransactionService": "finboard.domain.transaction",
    "DashboardService": "finboard.domain.dashboard",
    "AuditRecorder": "finboard.domain.audit",
    "AuditLogService": "finboard.domain.audit",
    "ReportService": "finboard.domain.report",
    "UserService": "finboard.domain.user",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports entities from this
# package, so they are resolved lazily.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
