"""
Database Models Package

This module exports all SQLAlchemy models for the voice receptionist.

Tables:
1. customers - Callers that appointments can be booked for
2. call_analytics - One outcome record per completed voice request
"""

from .database import (
    engine,
    AsyncSessionLocal,
    Base,
    init_db,
    close_db,
)

from .customer import Customer
from .call_analytic import CallAnalytic

__all__ = [
    # Database utilities
    "engine",
    "AsyncSessionLocal",
    "Base",
    "init_db",
    "close_db",

    # Models
    "Customer",
    "CallAnalytic",
]
