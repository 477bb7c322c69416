from fleet_erp.api.v1.endpoints import audit_logs, permissions, vehicles

__all__ = [
    "audit_logs",
    "permissions",
    "vehicles",
]
