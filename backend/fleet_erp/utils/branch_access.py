from __future__ import annotations

from uuid import UUID

from fleet_erp.core.exceptions import BadRequestError, ForbiddenError
from fleet_erp.services.permissions import Principal


def resolve_branch_id(requested_branch_id: UUID | None, principal: Principal) -> UUID:
    """Pick the branch a request operates on.

    Admins may target any branch and fall back to their own; everyone else is
    pinned to their own branch regardless of what they asked for.
    """
    if principal.is_admin:
        effective = requested_branch_id or principal.branch_id
        if effective is None:
            raise BadRequestError("branch_id is required")
        return effective

    if principal.branch_id is None:
        raise BadRequestError("User has no branch assigned")
    return principal.branch_id


def validate_branch_access(
    principal: Principal,
    requested_branch_id: UUID | None = None,
    entity_branch_id: UUID | None = None,
) -> None:
    if principal.is_admin:
        return

    if principal.branch_id is None:
        raise ForbiddenError("User has no branch assigned")

    if requested_branch_id is not None and requested_branch_id != principal.branch_id:
        raise ForbiddenError(
            "Access denied: only data from your own branch is available",
            details={"branch_id": str(requested_branch_id)},
        )

    if entity_branch_id is not None and entity_branch_id != principal.branch_id:
        raise ForbiddenError("Access denied: record belongs to another branch")
