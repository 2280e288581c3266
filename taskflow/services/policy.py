"""Access control for task records.

Admins bypass ownership checks; everyone else may only touch tasks whose
``user_id`` matches their own id.
"""
import enum
import logging
from typing import Optional

from taskflow.errors import Forbidden
from taskflow.models.enums import Role

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


def _is_admin(claims) -> bool:
    role = claims.role
    if role is Role.ADMIN:
        return True
    if role is Role.USER:
        return False
    raise Forbidden(f"Unknown role: {role!r}")


def authorize_task_access(claims, task, operation: Operation) -> Optional[int]:
    """Raise Forbidden unless ``claims`` may perform ``operation`` on ``task``.

    For ``create`` there is no stored task yet: ``task`` is the incoming
    payload and the effective owner id is returned (see
    :func:`resolve_task_owner`). Other operations return None.
    """
    operation = Operation(operation)
    if operation is Operation.CREATE:
        return resolve_task_owner(claims, getattr(task, "user_id", None))
    if _is_admin(claims):
        return None
    if task.user_id == claims.id:
        return None
    logger.warning(
        "Denied %s on task %s to user %s", operation.value, task.id, claims.id
    )
    raise Forbidden()


def resolve_task_owner(claims, target_owner_id: Optional[int] = None) -> int:
    """Owner id for a new task.

    Admins may create on behalf of another user. Any owner supplied by a
    non-admin is ignored.
    """
    if _is_admin(claims) and target_owner_id:
        return target_owner_id
    return claims.id


def authorize_admin_only(claims) -> None:
    if not _is_admin(claims):
        raise Forbidden("Access denied. Admin only.")


def owner_scope(claims) -> Optional[int]:
    """Owner id to restrict listings to, or None for unrestricted (admin)."""
    if _is_admin(claims):
        return None
    return claims.id
