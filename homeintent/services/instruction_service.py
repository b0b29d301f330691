"""
Instruction Service - end-to-end processing of one raw instruction.

```
"turn off all the lights"
         │
         ▼
  IntentExtractor (LLM)  ── ExtractionError ──► Failed(extraction_error)
         │
         ▼
  IntentDispatcher        ──► Applied / Denied / Failed
```

The service owns the request id and timing, and reports every step to
the monitor. The router only deals with HTTP.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from homeintent.ai.intent.parser import IntentExtractor
from homeintent.ai.intent.schemas import Intent
from homeintent.core.errors import ExtractionError, FailureKind
from homeintent.monitoring import DispatchMonitor, dispatch_monitor
from homeintent.services.dispatch_result import DispatchOutcome
from homeintent.services.dispatcher import IntentDispatcher

logger = logging.getLogger("homeintent.services.instruction_service")


@dataclass
class InstructionResult:
    """
    Result of processing an instruction.

    Attributes:
        outcome: The dispatch outcome (exactly one per request)
        intent: The extracted intent, None if extraction failed
        request_id: Unique request identifier for tracing
        processing_time_ms: End-to-end processing time
    """
    outcome: DispatchOutcome
    intent: Optional[Intent] = None
    request_id: str = ""
    processing_time_ms: float = 0.0

    @property
    def http_status(self) -> int:
        return self.outcome.http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for response."""
        result = self.outcome.to_dict()
        result.update({
            "target": self.intent.target if self.intent else None,
            "action": self.intent.action if self.intent else None,
            "location": self.intent.location if self.intent else None,
            "request_id": self.request_id,
            "processing_time_ms": self.processing_time_ms,
        })
        return result


class InstructionService:
    """
    Extracts and dispatches instructions.

    Usage:
        service = InstructionService(extractor, dispatcher)
        result = await service.process("open the door")
        print(result.http_status, result.outcome.message)
    """

    def __init__(
        self,
        extractor: IntentExtractor,
        dispatcher: IntentDispatcher,
        monitor: DispatchMonitor = dispatch_monitor,
    ):
        self.extractor = extractor
        self.dispatcher = dispatcher
        self.monitor = monitor

    async def process(self, text: str) -> InstructionResult:
        """Process one raw instruction into exactly one outcome."""
        start_time = time.time()
        request_id = str(uuid.uuid4())[:8]
        logger.info(f"[{request_id}] Processing instruction: {text[:50]}")

        intent: Optional[Intent] = None
        try:
            intent = await self.extractor.extract(text)
        except ExtractionError as e:
            self.monitor.track_extraction(
                request_id,
                text,
                latency_ms=self._elapsed_ms(start_time),
                success=False,
                error=e.detail,
            )
            outcome = DispatchOutcome.from_error(e)
        else:
            self.monitor.track_extraction(
                request_id,
                text,
                intent=intent.to_log_dict(),
                latency_ms=self._elapsed_ms(start_time),
            )
            outcome = await self._dispatch(intent, request_id)

        processing_time = self._elapsed_ms(start_time)
        self.monitor.track_outcome(request_id, outcome, processing_time_ms=processing_time)

        return InstructionResult(
            outcome=outcome,
            intent=intent,
            request_id=request_id,
            processing_time_ms=processing_time,
        )

    async def _dispatch(self, intent: Intent, request_id: str) -> DispatchOutcome:
        """Dispatch, turning unexpected exceptions into an internal_error outcome."""
        try:
            return await self.dispatcher.dispatch(intent, request_id=request_id)
        except Exception as e:
            logger.error(f"[{request_id}] Unexpected error while dispatching: {e}", exc_info=True)
            return DispatchOutcome.failed(FailureKind.INTERNAL_ERROR, "Internal error while dispatching")

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.time() - start_time) * 1000
