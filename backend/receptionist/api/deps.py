from fastapi import Request

from receptionist.services.pipeline import PipelineController
from receptionist.services.session import SessionAggregator


def get_pipeline(request: Request) -> PipelineController:
    """
    Dependency for the booking pipeline built at startup.
    """
    return request.app.state.services.pipeline


def get_aggregator(request: Request) -> SessionAggregator:
    """
    Dependency for the session aggregator built at startup.
    """
    return request.app.state.services.aggregator
