"""
Domain package for serialbench.

Exports the employee models and the sample dataset builder.
Keep this package focused on data definitions and validation concerns.
"""

from serialbench.domain.dataset import build_sample_dataset
from serialbench.domain.models import Employee, EmployeeCollection

__all__ = [
    "Employee",
    "EmployeeCollection",
    "build_sample_dataset",
]
