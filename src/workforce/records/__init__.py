"""Employee and employer records: snapshots and data-access helpers."""

from .models import EmployeeRecord, EmployerRecord

__all__ = ["EmployeeRecord", "EmployerRecord"]
