"""
Instructions Router - API endpoint for natural language device control.

This router handles POST /api, the single entry point for instructions.
It delegates all business logic to InstructionService and only maps the
outcome to an HTTP status:

    Applied, Denied                                  → 200
    unsupported target/action, invalid location,
    malformed request                                → 400
    extraction, authorization read, device write     → 500
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from homeintent.core.errors import FailureKind
from homeintent.deps import get_instruction_service, get_monitor
from homeintent.monitoring import DispatchMonitor
from homeintent.services.instruction_service import InstructionService


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("homeintent.routers.instructions")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["instructions"])


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class InstructionRequest(BaseModel):
    """
    Request schema for POST /api.

    Example:
    {
        "instruction": "turn on the light in the living room"
    }
    """
    instruction: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Natural language command",
    )


class InstructionResponse(BaseModel):
    """
    Response schema for POST /api.

    Example:
    {
        "success": true,
        "outcome": "applied",
        "message": "Light on in living room",
        "target": "light",
        "action": "on",
        "location": "living room",
        "addresses": ["light1/turn"],
        "request_id": "3f2a9c1e"
    }
    """
    success: bool = Field(description="False only for failed outcomes")
    outcome: str = Field(description="applied, denied or failed")
    message: Optional[str] = Field(default=None, description="Human-readable result")
    error: Optional[str] = Field(default=None, description="Error detail for failed outcomes")
    error_kind: Optional[str] = Field(default=None, description="Failure category")
    target: Optional[str] = Field(default=None, description="Extracted target")
    action: Optional[str] = Field(default=None, description="Extracted action")
    location: Optional[str] = Field(default=None, description="Extracted location")
    addresses: List[str] = Field(default_factory=list, description="Device addresses written")
    request_id: Optional[str] = Field(default=None, description="Request tracking ID")
    processing_time_ms: Optional[float] = Field(default=None, description="Processing time")


class DispatchStatsResponse(BaseModel):
    """Response schema for GET /api/stats."""
    total_requests: int
    applied: int
    denied: int
    failed: int
    success_rate: str
    failures_by_kind: Dict[str, int]
    device_writes: int
    failed_device_writes: int
    avg_extraction_latency_ms: float
    avg_processing_time_ms: float


def invalid_request_response() -> JSONResponse:
    """400 response for bodies that do not match InstructionRequest."""
    body = InstructionResponse(
        success=False,
        outcome="failed",
        error="Invalid request payload",
        error_kind=FailureKind.INVALID_REQUEST.value,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("", response_model=InstructionResponse)
async def process_instruction(
    request: InstructionRequest,
    service: InstructionService = Depends(get_instruction_service),
):
    """
    Process a natural language instruction.

    **Examples:**
    - "turn on the light in the living room"
    - "turn off all the lights"
    - "open the door"
    """
    try:
        result = await service.process(request.instruction)
    except Exception as e:
        logger.error(f"Failed to process instruction: {e}", exc_info=True)
        body = InstructionResponse(
            success=False,
            outcome="failed",
            error="Internal error while processing instruction",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )

    body = InstructionResponse(**result.to_dict())
    return JSONResponse(status_code=result.http_status, content=body.model_dump())


@router.get("/stats", response_model=DispatchStatsResponse)
async def get_dispatch_stats(monitor: DispatchMonitor = Depends(get_monitor)):
    """
    Get dispatch statistics.

    Returns aggregated counts of outcomes, failure kinds and device
    writes since start-up.
    """
    return DispatchStatsResponse(**monitor.get_stats().to_dict())
