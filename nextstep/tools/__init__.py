"""MCP tool implementations"""
from .next_step import next_step_handler, NextStepValidationError
from .nextstep_copy import get_next_step_message, add_encouragement
from .trigger_selection import select_trigger, TRIGGER_PRIORITY
from .formatting import format_money, pluralize

__all__ = [
    "next_step_handler",
    "NextStepValidationError",
    "get_next_step_message",
    "add_encouragement",
    "select_trigger",
    "TRIGGER_PRIORITY",
    "format_money",
    "pluralize",
]
