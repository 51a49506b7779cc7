from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object; employee CRUD lives outside this service, we only read.
    """

    employee_id: str
    name: str
    email: str
    position: str = ""
    department: str = ""
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "position": self.position,
            "department": self.department,
        }
