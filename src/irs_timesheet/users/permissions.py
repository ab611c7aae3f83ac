"""Role gating for account management.

| Actor       | May target / assign      | May block, edit or delete        |
|-------------|--------------------------|----------------------------------|
| Super Admin | any role                 | anyone except self               |
| Admin       | Employee, Manager        | Employee, Manager, not self      |
| others      | nothing                  | nothing                          |
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import Role

_ADMIN_ASSIGNABLE = frozenset({Role.EMPLOYEE, Role.MANAGER})


def assignable_roles(actor_role: Optional[Role]) -> frozenset[Role]:
    if actor_role == Role.SUPER_ADMIN:
        return frozenset(Role)
    if actor_role == Role.ADMIN:
        return _ADMIN_ASSIGNABLE
    return frozenset()


def can_create(actor_role: Optional[Role], new_role: Role) -> bool:
    if new_role.is_admin:
        return actor_role == Role.SUPER_ADMIN
    return actor_role is not None and actor_role.is_admin


def can_manage(
    *,
    actor_role: Optional[Role],
    actor_id: str,
    target_id: str,
    target_role: Optional[Role],
) -> bool:
    """Block/unblock, edit or delete ``target``."""
    if target_id == actor_id:
        return False
    if actor_role == Role.SUPER_ADMIN:
        return True
    return actor_role == Role.ADMIN and not (target_role is not None and target_role.is_admin)


def can_view(actor_role: Optional[Role], target_role: Optional[Role]) -> bool:
    """Super Admin accounts are hidden from everyone but Super Admins."""
    if target_role == Role.SUPER_ADMIN:
        return actor_role == Role.SUPER_ADMIN
    return True
