from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an account as seen by attendance reporting.

    Credentials live with the external identity provider, not here.
    """

    user_id: str
    name: str
    email: str
    role: Role = Role.EMPLOYEE
    phone: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
