from .entities import (
    Base,
    BookingServices,
    Bookings,
    Employees,
    Salons,
    ServiceCategories,
    Services,
    Users,
    metadata,
)

__all__ = [
    "Base",
    "metadata",
    "Users",
    "Salons",
    "Employees",
    "ServiceCategories",
    "Services",
    "Bookings",
    "BookingServices",
]
