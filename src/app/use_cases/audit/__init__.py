from .get_audit_events_use_case import GetAuditEventsUseCase

__all__ = ["GetAuditEventsUseCase"]
