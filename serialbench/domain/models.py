"""
Domain models for serialbench.

Defines the employee record and the root collection that every codec
serializes. The collection's `to_payload` output is the plain-dict root object
`{"employee": [...]}` handed to the codecs.
"""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Employee(BaseModel):
    """
    A single employee record.
    """

    id: int = Field(..., description="Numeric identifier, assumed unique within a run.")
    name: str = Field(..., description="Display name.")
    salary: int = Field(..., description="Yearly salary.")
    email: str = Field(..., description="Contact email address.")
    hire_date: str = Field(
        ..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Hire date in ISO form (YYYY-MM-DD)."
    )
    skills: List[str] = Field(default_factory=list, description="Ordered skill names.")
    is_active: bool = Field(True, description="Whether the employee is active.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }


class EmployeeCollection(BaseModel):
    """
    Ordered sequence of employees; insertion order is the canonical order.
    """

    employee: List[Employee] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_payload(self) -> Dict[str, Any]:
        """Root object handed to codecs, fields in declaration order."""
        return self.model_dump(mode="python")

    def __len__(self) -> int:
        return len(self.employee)


__all__ = ["Employee", "EmployeeCollection"]
