from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    Time,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Users(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True)
    role = Column(Enum('CUSTOMER', 'OWNER', name='user_role'), nullable=False, server_default='CUSTOMER')
    created_at = Column(DateTime, server_default=func.now())

    salons = relationship('Salons', back_populates='owner')
    bookings = relationship('Bookings', back_populates='customer')


class Salons(Base):
    __tablename__ = 'salons'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    owner_id = Column(ForeignKey('users.id'))
    address = Column(Text)
    city = Column(Text)
    currency = Column(Text, nullable=False, server_default='USD')
    # Time-of-day values, read back through duration.to_minutes
    opening_time = Column(Time)
    closing_time = Column(Time)

    owner = relationship('Users', back_populates='salons')
    employees = relationship('Employees', back_populates='salon', order_by='Employees.id')
    services = relationship('Services', back_populates='salon', order_by='Services.id')
    categories = relationship('ServiceCategories', back_populates='salon')
    bookings = relationship('Bookings', back_populates='salon')


class Employees(Base):
    __tablename__ = 'employees'

    id = Column(Integer, primary_key=True)
    salon_id = Column(ForeignKey('salons.id'), nullable=False)
    name = Column(Text, nullable=False)

    salon = relationship('Salons', back_populates='employees')
    bookings = relationship('Bookings', back_populates='employee')


class ServiceCategories(Base):
    __tablename__ = 'service_categories'

    id = Column(Integer, primary_key=True)
    salon_id = Column(ForeignKey('salons.id'), nullable=False)
    name = Column(Text, nullable=False)

    salon = relationship('Salons', back_populates='categories')
    services = relationship('Services', back_populates='category')


class Services(Base):
    __tablename__ = 'services'

    id = Column(Integer, primary_key=True)
    salon_id = Column(ForeignKey('salons.id'), nullable=False)
    category_id = Column(ForeignKey('service_categories.id'))
    name = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    # Offset from midnight: 00:45 means "45 minutes", not a wall-clock time
    duration = Column(Time, nullable=False)

    salon = relationship('Salons', back_populates='services')
    category = relationship('ServiceCategories', back_populates='services')


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        Index('ix_bookings_employee_date', 'employee_id', 'date'),
    )

    id = Column(Integer, primary_key=True)
    # Appointment start instant, salon-local
    date = Column(DateTime, nullable=False)
    salon_id = Column(ForeignKey('salons.id'), nullable=False)
    employee_id = Column(ForeignKey('employees.id'), nullable=False)
    customer_id = Column(ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    salon = relationship('Salons', back_populates='bookings')
    employee = relationship('Employees', back_populates='bookings')
    customer = relationship('Users', back_populates='bookings')
    booking_services = relationship(
        'BookingServices',
        back_populates='booking',
        cascade='all, delete-orphan',
        order_by='BookingServices.id',
    )

    @property
    def services(self) -> list['Services']:
        return [bs.service for bs in self.booking_services]


class BookingServices(Base):
    __tablename__ = 'booking_services'
    __table_args__ = (
        UniqueConstraint('booking_id', 'service_id'),
    )

    id = Column(Integer, primary_key=True)
    booking_id = Column(ForeignKey('bookings.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)

    booking = relationship('Bookings', back_populates='booking_services')
    service = relationship('Services')
