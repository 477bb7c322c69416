from fleet_erp.models.audit_log import AuditLog
from fleet_erp.models.branch import Branch
from fleet_erp.models.role import Permission, Role, RolePermission
from fleet_erp.models.user import User
from fleet_erp.models.vehicle import Vehicle

__all__ = [
    "AuditLog",
    "Branch",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "Vehicle",
]
