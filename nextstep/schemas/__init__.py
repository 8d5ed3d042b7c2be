"""
Schemas module for the NextStep advisor

Provides Pydantic models for data validation and serialization.
"""

from nextstep.schemas.nextstep import (
    NextStepContext,
    NextStepMessage,
    NextStepRequest,
    Tone,
    Trigger,
)

__all__ = [
    'NextStepContext',
    'NextStepMessage',
    'NextStepRequest',
    'Tone',
    'Trigger',
]
