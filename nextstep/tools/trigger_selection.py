"""Pick the single most urgent trigger for a budget snapshot."""

from typing import Callable, Optional, Tuple

from nextstep.schemas.nextstep import NextStepContext, Trigger
from nextstep.tools.formatting import round_to_cents

# Amounts are compared as displayed, so -0.001 is not "negative by $0.00"


def _debt_min_missing(context: NextStepContext) -> bool:
    return context.debt_min_missing_count > 0


def _left_to_budget_negative(context: NextStepContext) -> bool:
    return round_to_cents(context.left_to_budget) < 0


def _uncategorized_txns(context: NextStepContext) -> bool:
    return context.uncategorized_count > 0


def _category_overspent(context: NextStepContext) -> bool:
    # Label is optional; the copy falls back to "a category"
    if context.overspent_amount is None:
        return False
    return not round_to_cents(context.overspent_amount).is_zero()


def _left_to_budget_positive(context: NextStepContext) -> bool:
    return round_to_cents(context.left_to_budget) > 0


# Most urgent first
TRIGGER_RULES: Tuple[Tuple[Trigger, Callable[[NextStepContext], bool]], ...] = (
    (Trigger.DEBT_MIN_MISSING, _debt_min_missing),
    (Trigger.LEFT_TO_BUDGET_NEGATIVE, _left_to_budget_negative),
    (Trigger.UNCATEGORIZED_TXNS, _uncategorized_txns),
    (Trigger.CATEGORY_OVERSPENT, _category_overspent),
    (Trigger.LEFT_TO_BUDGET_POSITIVE, _left_to_budget_positive),
)

TRIGGER_PRIORITY: Tuple[Trigger, ...] = tuple(trigger for trigger, _ in TRIGGER_RULES)


def select_trigger(context: NextStepContext) -> Optional[Trigger]:
    """Return the first trigger whose condition holds, or None when the budget needs nothing."""
    for trigger, applies in TRIGGER_RULES:
        if applies(context):
            return trigger
    return None
