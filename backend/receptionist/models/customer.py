"""
Customer Model - Caller Directory

Customers are matched by the phone number the call arrives from. The
primary key doubles as the Easy!Appointments customer id.
"""
from sqlalchemy import Column, String, DateTime, Integer
from datetime import datetime

from .database import Base


class Customer(Base):
    """Known caller that appointments can be booked for"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(32), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Customer(id={self.id}, phone_number={self.phone_number})>"
