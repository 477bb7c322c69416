"""Catalog of every permission known to the ERP.

Permissions are named ``<module>.<action>``; the segment before the first dot
is the module the permission belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionDefinition:
    name: str
    description: str
    module: str
    action: str


@dataclass(frozen=True)
class PermissionModule:
    module: str
    module_name: str
    permissions: tuple[PermissionDefinition, ...]


def _module(module: str, module_name: str, *actions: tuple[str, str]) -> PermissionModule:
    return PermissionModule(
        module=module,
        module_name=module_name,
        permissions=tuple(
            PermissionDefinition(name=f"{module}.{action}", description=description, module=module, action=action)
            for action, description in actions
        ),
    )


PERMISSIONS: tuple[PermissionModule, ...] = (
    _module(
        "vehicles",
        "Vehicles",
        ("view", "View vehicle list and details"),
        ("create", "Register new vehicles"),
        ("update", "Edit vehicle information"),
        ("delete", "Delete vehicles"),
        ("update-status", "Change vehicle status (active, maintenance, ...)"),
        ("update-km", "Update vehicle mileage"),
        ("view-costs", "View vehicle maintenance costs"),
    ),
    _module(
        "vehicle-brands",
        "Vehicle brands",
        ("view", "View vehicle brands"),
        ("create", "Register new brands"),
        ("update", "Edit vehicle brands"),
        ("delete", "Delete vehicle brands"),
    ),
    _module(
        "vehicle-models",
        "Vehicle models",
        ("view", "View vehicle models"),
        ("create", "Register new models"),
        ("update", "Edit vehicle models"),
        ("delete", "Delete vehicle models"),
    ),
    _module(
        "vehicle-documents",
        "Vehicle documents",
        ("view", "View vehicle documents"),
        ("create", "Upload vehicle documents"),
        ("update", "Edit vehicle documents"),
        ("delete", "Delete vehicle documents"),
        ("download", "Download vehicle documents"),
    ),
    _module(
        "vehicle-markings",
        "Vehicle markings",
        ("view", "View vehicle arrival markings"),
        ("create", "Register vehicle arrivals"),
        ("delete", "Delete vehicle markings"),
    ),
    _module(
        "maintenance",
        "Maintenance",
        ("view", "View service orders"),
        ("create", "Create service orders"),
        ("update", "Edit service orders"),
        ("delete", "Delete service orders"),
        ("complete", "Complete service orders"),
        ("cancel", "Cancel service orders"),
        ("manage-materials", "Add or remove materials on orders"),
        ("manage-services", "Add or remove services on orders"),
        ("upload-attachment", "Upload attachments to service orders"),
    ),
    _module(
        "maintenance-labels",
        "Maintenance labels and road records",
        ("view", "View labels and change records"),
        ("create", "Create maintenance labels"),
        ("delete", "Delete labels"),
        ("register-change", "Register changes on the road"),
    ),
    _module(
        "employees",
        "Employees",
        ("view", "View employees and personal data"),
        ("create", "Register new employees"),
        ("update", "Edit employee data"),
        ("delete", "Delete or deactivate employees"),
        ("view-costs", "View employee costs and salaries"),
    ),
    _module(
        "employee-benefits",
        "Employee benefits",
        ("view", "View benefits assigned to employees"),
        ("manage", "Assign or remove employee benefits"),
    ),
    _module(
        "benefits",
        "Benefit catalog",
        ("view", "View registered benefits"),
        ("create", "Register new benefits"),
        ("update", "Edit benefits"),
        ("delete", "Delete benefits"),
    ),
    _module(
        "vacations",
        "Vacations",
        ("view", "View employee vacations"),
        ("create", "Register employee vacations"),
        ("update", "Edit vacation records"),
        ("delete", "Delete or cancel vacations"),
        ("calculate", "Calculate vacation amounts"),
    ),
    _module(
        "payroll",
        "Payroll",
        ("view", "View payroll"),
        ("process", "Process payroll"),
    ),
    _module(
        "expenses",
        "Expenses and reimbursements",
        ("view", "View expenses and reimbursements"),
        ("create", "Register expenses or reimbursements"),
        ("update", "Edit expenses or reimbursements"),
        ("delete", "Delete expenses or reimbursements"),
        ("approve", "Approve or reject reimbursements"),
    ),
    _module(
        "products",
        "Products",
        ("view", "View registered products"),
        ("create", "Register new products"),
        ("update", "Edit products"),
        ("delete", "Delete products"),
    ),
    _module(
        "stock",
        "Stock",
        ("view", "View stock and movements"),
        ("create-movement", "Register stock movements (in/out)"),
        ("adjust", "Adjust stock quantities"),
    ),
    _module(
        "accounts-payable",
        "Accounts payable",
        ("view", "View accounts payable"),
        ("create", "Register accounts payable"),
        ("update", "Edit accounts payable"),
        ("delete", "Delete accounts payable"),
        ("pay", "Mark accounts as paid"),
        ("view-summary", "View financial summary"),
    ),
    _module(
        "accounts-receivable",
        "Accounts receivable",
        ("view", "View accounts receivable"),
        ("create", "Register accounts receivable"),
        ("update", "Edit accounts receivable"),
        ("delete", "Delete accounts receivable"),
        ("receive", "Mark accounts as received"),
    ),
    _module(
        "wallet",
        "Company wallet",
        ("view", "View wallet balance and movements"),
        ("adjust", "Adjust balance manually"),
        ("view-history", "View adjustment history"),
    ),
    _module(
        "branches",
        "Branches",
        ("view", "View branches"),
        ("create", "Register new branches"),
        ("update", "Edit branches"),
        ("delete", "Delete branches"),
    ),
    _module(
        "roles",
        "Roles",
        ("view", "View roles"),
        ("create", "Register new roles"),
        ("update", "Edit roles and permissions"),
        ("delete", "Delete roles"),
    ),
    _module(
        "users",
        "Users",
        ("view", "View system users"),
        ("create", "Create new users"),
        ("update", "Edit users"),
        ("delete", "Delete or deactivate users"),
    ),
    _module(
        "units",
        "Units of measure",
        ("view", "View units of measure"),
        ("create", "Register units of measure"),
        ("update", "Edit units of measure"),
        ("delete", "Delete units of measure"),
    ),
    _module(
        "audit",
        "Audit",
        ("view", "View audit logs"),
    ),
    _module(
        "dashboard",
        "Dashboard",
        ("view", "View dashboard and metrics"),
    ),
)

ALL_PERMISSIONS: tuple[PermissionDefinition, ...] = tuple(
    permission for module in PERMISSIONS for permission in module.permissions
)

MODULE_NAMES: tuple[str, ...] = tuple(module.module for module in PERMISSIONS)

_BY_NAME = {permission.name: permission for permission in ALL_PERMISSIONS}


def get_permission_by_name(name: str) -> PermissionDefinition | None:
    return _BY_NAME.get(name)


def get_permissions_by_module(module: str) -> list[PermissionDefinition]:
    return [permission for permission in ALL_PERMISSIONS if permission.module == module]


def module_of(permission: str) -> str:
    return permission.split(".", 1)[0]
