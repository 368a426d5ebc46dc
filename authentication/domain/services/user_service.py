"""
UserService - Administrative user management.

Create, list, retrieve, update and delete accounts on behalf of an admin.
Passwords are accepted on creation and never handed back.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from authentication.domain.identity import Actor, Role
from authentication.infra.observability.metrics import user_admin_actions_total
from utils.logging_utils import sanitize_payload

from .results import AuthErrorCodes, Result


User = get_user_model()
logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("username", "email", "role")


class UserService:
    """
    Admin-facing user management.

    Callers are expected to have checked the admin role already; the service
    only enforces data rules.
    """

    def list_users(self, role: Optional[str] = None) -> Result:
        users = User.objects.all()
        if role:
            if Role.parse(role) is None:
                return Result(
                    success=False, error=f"Unknown role '{role}'", error_code=AuthErrorCodes.MALFORMED_REQUEST
                )
            users = users.filter(role=role)
        return Result(success=True, data=list(users))

    def get_user(self, user_id) -> Result:
        user = self._find(user_id)
        if user is None:
            return Result(success=False, error="User not found", error_code=AuthErrorCodes.USER_NOT_FOUND)
        return Result(success=True, data=user)

    def create_user(self, data: Dict[str, Any]) -> Result:
        """
        Create an account with any role.

        ``data`` comes from AdminUserCreateSerializer; this only checks that
        email (case-insensitive) and username are unused.
        """
        logger.info(f"Admin user creation requested: {sanitize_payload(data, ('username', 'email', 'role'))}")

        username = data["username"]
        email = data["email"]
        role = data["role"]

        if User.objects.filter(email__iexact=email).exists():
            return self._failed("create", "User with this email already exists", AuthErrorCodes.CONFLICT)
        if User.objects.filter(username=username).exists():
            return self._failed("create", "User with this username already exists", AuthErrorCodes.CONFLICT)

        try:
            with transaction.atomic():
                user = User.objects.create_user(username=username, email=email, password=data["password"], role=role)
        except IntegrityError:
            return self._failed("create", "User already exists", AuthErrorCodes.CONFLICT)

        user_admin_actions_total.labels(action="create", status="success").inc()
        logger.info(f"User {user.id} created with role {role}")
        return Result(success=True, message="User created", data=user)

    def update_user(self, user_id, data: Dict[str, Any]) -> Result:
        """Update username, email and/or role from AdminUserUpdateSerializer data."""
        user = self._find(user_id)
        if user is None:
            return self._failed("update", "User not found", AuthErrorCodes.USER_NOT_FOUND)

        changes = {field: data[field] for field in UPDATABLE_FIELDS if field in data}

        others = User.objects.exclude(pk=user.pk)
        if "email" in changes and others.filter(email__iexact=changes["email"]).exists():
            return self._failed("update", "User with this email already exists", AuthErrorCodes.CONFLICT)
        if "username" in changes and others.filter(username=changes["username"]).exists():
            return self._failed("update", "User with this username already exists", AuthErrorCodes.CONFLICT)

        for field, value in changes.items():
            setattr(user, field, value)
        user.save(update_fields=[*changes.keys(), "updated_at"])

        user_admin_actions_total.labels(action="update", status="success").inc()
        logger.info(f"User {user.id} updated fields {sorted(changes)}")
        return Result(success=True, message="User updated", data=user)

    def delete_user(self, user_id, actor: Actor) -> Result:
        """
        Delete an account.

        Users referenced by products or orders are kept; the database protects
        those rows and the caller gets a conflict.
        """
        user = self._find(user_id)
        if user is None:
            return self._failed("delete", "User not found", AuthErrorCodes.USER_NOT_FOUND)

        if user.pk == actor.id:
            return self._failed("delete", "Admins can not delete their own account", AuthErrorCodes.CONFLICT)

        try:
            user.delete()
        except ProtectedError:
            return self._failed(
                "delete", "User is referenced by existing products or orders", AuthErrorCodes.CONFLICT
            )

        user_admin_actions_total.labels(action="delete", status="success").inc()
        logger.info(f"User {user_id} deleted by admin {actor.id}")
        return Result(success=True, message="User deleted")

    def _find(self, user_id):
        try:
            return User.objects.filter(pk=uuid.UUID(str(user_id))).first()
        except ValueError:
            return None

    def _failed(self, action: str, error: str, error_code: str) -> Result:
        user_admin_actions_total.labels(action=action, status="failed").inc()
        logger.info(f"User {action} rejected: {error}")
        return Result(success=False, error=error, error_code=error_code)
