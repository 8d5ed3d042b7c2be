"""
Next Step Tool - pick and phrase the one thing the user should do next

Validates the incoming budget snapshot, chooses the most urgent trigger
unless the caller forces one, and renders the message in the requested tone.
Shared by the get_next_step MCP tool and POST /api/next-step.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from nextstep.config import settings
from nextstep.logger import create_logger, ErrorType
from nextstep.schemas.nextstep import NextStepContext, NextStepRequest, Tone, Trigger
from nextstep.tools.nextstep_copy import get_next_step_message
from nextstep.tools.trigger_selection import select_trigger

# Create logger for this module
logger = create_logger("next_step")

NO_TRIGGER_VALUES = {"", "NONE", "NULL"}
NOTHING_TO_DO_TEXT = "Nothing needs attention right now."


class NextStepValidationError(ValueError):
    """Raised when a next step request fails validation"""


def parse_next_step_request(payload: Mapping[str, Any]) -> NextStepRequest:
    """Validate a raw request payload, logging what was rejected."""
    try:
        return NextStepRequest.model_validate(dict(payload))
    except ValidationError as e:
        logger.validation_error("next_step_request", e, dict(payload))
        raise NextStepValidationError(f"Invalid next step request: {e}") from e


def _resolve_tone(tone: Optional[Tone]) -> Tone:
    if tone is not None:
        return tone
    return Tone(settings.default_tone.lower())


def _resolve_trigger(
    requested: Optional[str], context: NextStepContext
) -> Union[Trigger, str, None]:
    """Selected trigger when none was requested, otherwise the requested tag as-is."""
    if requested is None:
        return select_trigger(context)

    normalized = requested.strip().upper()
    if normalized in NO_TRIGGER_VALUES:
        return None
    if normalized not in Trigger.__members__:
        logger.warn("Unknown trigger requested", {"trigger": requested})
        return requested
    return Trigger(normalized)


def next_step_handler(
    context: Union[Mapping[str, Any], NextStepContext, None],
    tone: Optional[str] = None,
    trigger: Optional[str] = None,
    encouragement: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Build the next step message for a budget snapshot.

    Args:
        context: Budget aggregates (snake_case or camelCase keys)
        tone: facts, guided or coach (defaults to DEFAULT_TONE)
        trigger: Force a trigger; omit to use the priority order,
            "NONE" for no message
        encouragement: Append an encouraging sentence (defaults to ENCOURAGEMENT)

    Returns:
        Dict with:
        - structuredContent: trigger, tone and the rendered message (or None)
        - content: the message body as text

    Raises:
        NextStepValidationError: context or tone failed validation
    """
    started_at = logger.tool_call_start(
        "get_next_step",
        {"tone": tone, "trigger": trigger, "encouragement": encouragement},
    )

    try:
        request = parse_next_step_request({
            "context": context,
            "tone": tone,
            "trigger": trigger,
            "encouragement": encouragement,
        })
    except NextStepValidationError as e:
        logger.tool_call_error("get_next_step", started_at, e, ErrorType.VALIDATION_ERROR)
        raise

    resolved_tone = _resolve_tone(request.tone)
    resolved_trigger = _resolve_trigger(request.trigger, request.context)
    use_encouragement = (
        settings.encouragement if request.encouragement is None else request.encouragement
    )

    message = get_next_step_message(
        resolved_trigger, resolved_tone, request.context, use_encouragement
    )

    trigger_value = resolved_trigger.value if isinstance(resolved_trigger, Trigger) else resolved_trigger

    logger.tool_call_end("get_next_step", started_at, {
        "trigger": trigger_value,
        "tone": resolved_tone.value,
        "has_message": message is not None,
    })

    return {
        "structuredContent": {
            "kind": "next_step",
            "trigger": trigger_value,
            "tone": resolved_tone.value,
            "encouragement": use_encouragement,
            "context": request.context.model_dump(),
            "message": message.model_dump() if message else None,
        },
        "content": [
            {
                "type": "text",
                "text": message.body if message else NOTHING_TO_DO_TEXT,
            }
        ],
    }
