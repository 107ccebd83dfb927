"""Shared ``--user`` / ``--admin`` options that say who is calling."""

from __future__ import annotations

import functools
from collections.abc import Callable

import click

from bookstore.domain.model.identity import Principal, Role


def as_principal(func: Callable) -> Callable:
    """Collapse ``--user`` and ``--admin`` into a ``principal`` argument."""

    @click.option("--user", "user_id", required=True, help="ID of the calling user.")
    @click.option("--admin", is_flag=True, default=False, help="Call with the admin role.")
    @functools.wraps(func)
    def wrapper(*args, user_id: str, admin: bool, **kwargs):
        principal = Principal(id=user_id, role=Role.ADMIN if admin else Role.USER)
        return func(*args, principal=principal, **kwargs)

    return wrapper
