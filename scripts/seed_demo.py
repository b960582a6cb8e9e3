"""
Create a demo salon with staff, services and a test customer.

Usage:
    python scripts/seed_demo.py
"""

import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))

from decimal import Decimal

from salon_booking.database import SessionLocal, init_db
from salon_booking.models import Employees, Salons, ServiceCategories, Services, Users
from salon_booking.services.booking.duration import parse_time_string

SALON_NAME = "Demo Salon"

EMPLOYEE_NAMES = ["Alex Smith", "Jordan Brown", "Taylor Garcia"]

# (category, name, price, "HH:MM" duration)
SERVICES = [
    ("Hair", "Haircut", "35.00", "00:30"),
    ("Hair", "Hair Color", "80.00", "01:30"),
    ("Hair", "Blow Dry", "25.00", "00:45"),
    ("Beard", "Beard Trim", "15.00", "00:15"),
    ("Beard", "Full Shave", "30.00", "00:30"),
]

CUSTOMER_EMAIL = "testcustomer@test.com"
OWNER_EMAIL = "owner@test.com"


def main():
    init_db()
    db = SessionLocal()
    try:
        if db.query(Salons).filter(Salons.name == SALON_NAME).first():
            print(f"{SALON_NAME} already exists, nothing to do")
            return

        owner = Users(name="Salon Owner", email=OWNER_EMAIL, role="OWNER")
        customer = Users(name="Test Customer", email=CUSTOMER_EMAIL, role="CUSTOMER")
        db.add_all([owner, customer])
        db.flush()

        salon = Salons(
            name=SALON_NAME,
            owner_id=owner.id,
            address="123 Broadway",
            city="New York",
            currency="USD",
            opening_time=parse_time_string("09:00"),
            closing_time=parse_time_string("18:00"),
        )
        db.add(salon)
        db.flush()

        db.add_all([Employees(salon_id=salon.id, name=name) for name in EMPLOYEE_NAMES])

        categories: dict[str, ServiceCategories] = {}
        for category_name, name, price, duration in SERVICES:
            category = categories.get(category_name)
            if category is None:
                category = ServiceCategories(salon_id=salon.id, name=category_name)
                db.add(category)
                db.flush()
                categories[category_name] = category
            db.add(Services(
                salon_id=salon.id,
                category_id=category.id,
                name=name,
                price=Decimal(price),
                duration=parse_time_string(duration),
            ))

        db.commit()
        print(f"Created {SALON_NAME}: salon_id={salon.id}, customer_id={customer.id}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
