"""Business Logic Services.

This package contains the service modules that implement the voice
receptionist's core logic.

Service Categories:
- Session: Aggregation of a live interaction stream into a summary
- Language: Cached language detection
- Translation: Best-effort text translation
- Booking: Date/time extraction, booking state machine, scheduler client
- Core: Repositories for customers and analytics

Pipeline:
- pipeline: Sequences one voice turn and applies the fallback policy
- factory: Builds every capability object from settings
"""
