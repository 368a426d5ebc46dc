import logging
from typing import Optional

from django.contrib.auth import get_user_model

from authentication.domain.identity import Actor, Role

logger = logging.getLogger(__name__)


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user from the DB with only the fields we need.

    Returns None if the user is not authenticated or no longer exists.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    # Only load minimal fields required for RBAC checks
    return User.objects.only("id", "role", "is_superuser").filter(pk=getattr(user, "pk", None)).first()


def resolve_actor(user) -> Optional[Actor]:
    """Resolve the acting identity of an authenticated user from its persisted row.

    The role claim carried by the token is never consulted, so a role change
    made by an admin applies to the next request.
    """
    db_user = _fetch_user_from_db(user)
    if db_user is None:
        return None
    return Actor.from_user(db_user)


def has_role(user, *roles: Role) -> bool:
    actor = resolve_actor(user)
    if actor is None:
        return False
    allowed = actor.role in roles
    if not allowed:
        logger.warning(
            "RBAC denial: user %s with role %s lacks one of %s",
            actor.id,
            actor.role.value,
            [role.value for role in roles],
        )
    return allowed

