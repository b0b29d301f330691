"""
Dependencies module - reusable FastAPI dependencies for route handlers.

The process-wide collaborators (store handle, LLM provider, dispatcher)
are built once in the application lifespan and stored on app.state.
Routes receive them through these dependencies, which is also the hook
tests use to swap in doubles (app.dependency_overrides).
"""

from fastapi import Request

from homeintent.monitoring import DispatchMonitor
from homeintent.services.instruction_service import InstructionService


def get_instruction_service(request: Request) -> InstructionService:
    """Return the InstructionService built at start-up."""
    return request.app.state.instruction_service


def get_monitor(request: Request) -> DispatchMonitor:
    """Return the DispatchMonitor shared by the process."""
    return request.app.state.monitor
