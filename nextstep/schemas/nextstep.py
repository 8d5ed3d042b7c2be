"""
NextStep Data Schema - Pydantic Models

Contract between the budget aggregation layer (which computes the numbers),
the advisory engine (which phrases them) and the frontend (which shows the
returned title/body verbatim).

Key principles:
1. Callers send PRE-COMPUTED aggregates, never raw transactions
2. Field names accept both snake_case and the frontend's camelCase
3. Validation happens here, at the boundary; the engine trusts its input
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ============================================================================
# ENUMERATIONS
# ============================================================================

class Tone(str, Enum):
    """Voice used to phrase a message"""
    FACTS = "facts"    # Neutral statement of the condition
    GUIDED = "guided"  # Directive, second-person instruction
    COACH = "coach"    # Warm, motivational framing


class Trigger(str, Enum):
    """Budget condition a message is about"""
    DEBT_MIN_MISSING = "DEBT_MIN_MISSING"
    LEFT_TO_BUDGET_NEGATIVE = "LEFT_TO_BUDGET_NEGATIVE"
    UNCATEGORIZED_TXNS = "UNCATEGORIZED_TXNS"
    CATEGORY_OVERSPENT = "CATEGORY_OVERSPENT"
    LEFT_TO_BUDGET_POSITIVE = "LEFT_TO_BUDGET_POSITIVE"


# ============================================================================
# CONTEXT SCHEMA
# ============================================================================

class NextStepContext(BaseModel):
    """Snapshot of the budget values any message may need"""
    left_to_budget: float = Field(default=0.0, alias="leftToBudget", allow_inf_nan=False)
    uncategorized_count: int = Field(default=0, ge=0, alias="uncategorizedCount")
    debt_min_missing_count: int = Field(default=0, ge=0, alias="debtMinMissingCount")

    # Only present when a category is over plan
    overspent_label: Optional[str] = Field(default=None, alias="overspentLabel")
    overspent_amount: Optional[float] = Field(
        default=None, alias="overspentAmount", allow_inf_nan=False
    )

    class Config:
        frozen = True
        populate_by_name = True
        extra = "ignore"


# ============================================================================
# MESSAGE SCHEMA
# ============================================================================

class NextStepMessage(BaseModel):
    """Rendered message, displayed as-is"""
    title: str
    body: str

    class Config:
        frozen = True


# ============================================================================
# REQUEST SCHEMA
# ============================================================================

class NextStepRequest(BaseModel):
    """Payload accepted by the get_next_step tool and POST /api/next-step"""
    context: NextStepContext
    tone: Optional[Tone] = None
    trigger: Optional[str] = None  # Omit to let the priority order pick one
    encouragement: Optional[bool] = None

    class Config:
        extra = "forbid"
