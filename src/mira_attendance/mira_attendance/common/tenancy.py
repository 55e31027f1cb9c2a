"""College-level tenancy rules.

A non super-admin user with a college code only sees data that belongs to
users of the same college.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from ..core.enums import Role

T = TypeVar("T")


def is_tenant_scoped(current_user) -> bool:
    return current_user.role != Role.SUPER_ADMIN and bool(current_user.college_code)


def apply_tenant_filter(
    items: Iterable[T],
    current_user,
    get_college_code: Callable[[T], Optional[str]],
) -> list[T]:
    items = list(items)
    if not is_tenant_scoped(current_user):
        return items
    return [item for item in items if get_college_code(item) == current_user.college_code]


def can_see(current_user, college_code: Optional[str]) -> bool:
    if not is_tenant_scoped(current_user):
        return True
    return college_code == current_user.college_code
