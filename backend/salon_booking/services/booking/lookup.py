# backend/salon_booking/services/booking/lookup.py
"""
Resolve the salon, employee and services named by a booking request.
"""

from dataclasses import dataclass
from typing import Union

from ...models import Employees, Salons, Services
from .errors import BookingError, not_found


@dataclass(frozen=True)
class Selection:
    salon: Salons
    employee: Employees
    services: list[Services]


def resolve_selection(
    repo,
    salon_id: int,
    employee_id: int,
    service_ids: list[int],
) -> Union[Selection, BookingError]:
    """
    Look up salon, employee and services, checking they belong together.

    The resolved service set must be exactly as large as the requested id
    list: unknown ids, ids of another salon and repeated ids all fail.
    """
    salon = repo.get_salon(salon_id)
    if salon is None:
        return not_found("salon")

    employee = next((e for e in salon.employees if e.id == employee_id), None)
    if employee is None:
        return not_found("employee")

    requested = list(service_ids)
    services = [s for s in salon.services if s.id in requested]
    if not requested or len(services) != len(requested):
        return not_found("service")

    return Selection(salon=salon, employee=employee, services=services)
