"""
Core Services Package

Data access shared by the booking pipeline.
"""

from receptionist.services.core.repositories import CustomerRepository, AnalyticsRepository

__all__ = [
    "CustomerRepository",
    "AnalyticsRepository",
]
