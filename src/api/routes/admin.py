# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin endpoints.

This module provides the privileged endpoints:
- POST /create-admin - Create an admin account
- GET /teachers/pending - List teachers awaiting approval
- POST /teachers/{teacher_id}/approve - Approve a teacher
- DELETE /teachers/{teacher_id}/reject - Reject and remove a teacher
- GET /list-admins - List active admins
- DELETE /delete-admin/{admin_id} - Soft-delete an admin
- GET /deleted-admins - List deleted admins (super admin)
- POST /restore-admin/{deleted_id} - Restore a deleted admin (super admin)
- GET /audit-logs - Read the audit trail (super admin)

Admin and super admin may call every endpoint except the last three, which
are reserved for super admins.
"""

import logging

from fastapi import APIRouter, Query, status

from src.api.dependencies import AdminServiceDep, AdminUser, SuperAdminUser
from src.domains.admin.service import DEFAULT_AUDIT_LIMIT
from src.models.admin import (
    AdminSummary,
    AuditLogResponse,
    CreateAdminRequest,
    CreateAdminResponse,
    DeletedAdminResponse,
    PendingTeacher,
)
from src.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


# =========================================================================
# Admin accounts
# =========================================================================


@router.post(
    "/create-admin",
    response_model=CreateAdminResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an admin account",
)
async def create_admin(
    data: CreateAdminRequest,
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> CreateAdminResponse:
    """Create an admin or super admin account."""
    result = await admin_service.create_admin(
        full_name=data.full_name,
        email=data.email,
        phone=data.phone,
        password=data.password,
        role=data.role,
        actor_id=current_user.id,
        actor_role=current_user.role,
    )

    return CreateAdminResponse(
        message=result.message,
        user=AdminSummary.model_validate(result.user),
    )


@router.get(
    "/list-admins",
    response_model=list[AdminSummary],
    summary="List active admins",
)
async def list_admins(
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> list[AdminSummary]:
    """List active admins and super admins, newest first."""
    admins = await admin_service.list_admins()
    return [AdminSummary.model_validate(a) for a in admins]


@router.delete(
    "/delete-admin/{admin_id}",
    response_model=MessageResponse,
    summary="Soft-delete an admin",
)
async def delete_admin(
    admin_id: int,
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> MessageResponse:
    """Deactivate an admin and keep a tombstone for restore.

    Super admins cannot be deleted, and nobody can delete themselves.
    """
    await admin_service.delete_admin(
        admin_id=admin_id,
        actor_id=current_user.id,
        actor_role=current_user.role,
    )
    return MessageResponse(message="Admin deleted successfully")


@router.get(
    "/deleted-admins",
    response_model=list[DeletedAdminResponse],
    summary="List deleted admins",
)
async def list_deleted_admins(
    current_user: SuperAdminUser,
    admin_service: AdminServiceDep,
) -> list[DeletedAdminResponse]:
    """List tombstones of deleted admins, most recent first."""
    deleted = await admin_service.list_deleted_admins()
    return [DeletedAdminResponse.model_validate(d) for d in deleted]


@router.post(
    "/restore-admin/{deleted_id}",
    response_model=MessageResponse,
    summary="Restore a deleted admin",
)
async def restore_admin(
    deleted_id: int,
    current_user: SuperAdminUser,
    admin_service: AdminServiceDep,
) -> MessageResponse:
    """Reactivate a deleted admin.

    The path parameter is the tombstone ID returned by /deleted-admins.
    """
    await admin_service.restore_admin(
        deleted_id=deleted_id,
        actor_id=current_user.id,
        actor_role=current_user.role,
    )
    return MessageResponse(message="Admin restored successfully")


# =========================================================================
# Teachers
# =========================================================================


@router.get(
    "/teachers/pending",
    response_model=list[PendingTeacher],
    summary="List teachers awaiting approval",
)
async def get_pending_teachers(
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> list[PendingTeacher]:
    """List unapproved teachers, newest first."""
    teachers = await admin_service.get_pending_teachers()
    return [PendingTeacher.model_validate(t) for t in teachers]


@router.post(
    "/teachers/{teacher_id}/approve",
    response_model=MessageResponse,
    summary="Approve a teacher",
)
async def approve_teacher(
    teacher_id: int,
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> MessageResponse:
    """Approve a teacher so they can log in."""
    await admin_service.approve_teacher(
        teacher_id=teacher_id,
        actor_id=current_user.id,
        actor_role=current_user.role,
    )
    return MessageResponse(message="Teacher approved successfully")


@router.delete(
    "/teachers/{teacher_id}/reject",
    response_model=MessageResponse,
    summary="Reject a teacher",
)
async def reject_teacher(
    teacher_id: int,
    current_user: AdminUser,
    admin_service: AdminServiceDep,
) -> MessageResponse:
    """Reject a teacher and remove the account permanently."""
    await admin_service.reject_teacher(
        teacher_id=teacher_id,
        actor_id=current_user.id,
        actor_role=current_user.role,
    )
    return MessageResponse(message="Teacher rejected and removed")


# =========================================================================
# Audit trail
# =========================================================================


@router.get(
    "/audit-logs",
    response_model=list[AuditLogResponse],
    summary="Read the audit trail",
)
async def list_audit_logs(
    current_user: SuperAdminUser,
    admin_service: AdminServiceDep,
    limit: int = Query(DEFAULT_AUDIT_LIMIT, ge=1, le=1000, description="Maximum entries"),
) -> list[AuditLogResponse]:
    """List audit entries, newest first."""
    logs = await admin_service.list_audit_logs(limit=limit)
    return [AuditLogResponse.model_validate(entry) for entry in logs]
