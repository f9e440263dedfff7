"""
Fixed sample dataset used by every benchmark run.
"""

from __future__ import annotations

from serialbench.domain.models import Employee, EmployeeCollection


def build_sample_dataset() -> EmployeeCollection:
    """
    Build the deterministic three-record employee collection.
    """
    employees = [
        Employee(
            id=1,
            name="Ali",
            salary=9000,
            email="ali@example.com",
            hire_date="2020-01-15",
            skills=["JavaScript", "Node.js", "React"],
            is_active=True,
        ),
        Employee(
            id=2,
            name="Kamal",
            salary=22000,
            email="kamal@example.com",
            hire_date="2018-06-20",
            skills=["Python", "Django", "PostgreSQL"],
            is_active=True,
        ),
        Employee(
            id=3,
            name="Amal",
            salary=23000,
            email="amal@example.com",
            hire_date="2019-03-10",
            skills=["Java", "Spring Boot", "Kubernetes", "gRPC"],
            is_active=False,
        ),
    ]
    return EmployeeCollection(employee=employees)


__all__ = ["build_sample_dataset"]
