"""
NextStep Copy - the advisory engine

Turns one budget trigger plus a context snapshot into a short coaching
message. Each trigger has a renderer holding its tone-keyed core sentence
and its elaboration; encouragement is appended afterwards for every trigger.

Pure: no I/O, no logging, never mutates the context.
"""

from typing import Callable, Dict, Optional, Union

from nextstep.schemas.nextstep import NextStepContext, NextStepMessage, Tone, Trigger
from nextstep.tools.formatting import count_noun, format_money

NEXT_STEP_TITLE = "NextStep"
FALLBACK_CATEGORY_LABEL = "a category"

ENCOURAGEMENT = {
    Tone.FACTS: "Small steps compound.",
    Tone.GUIDED: "Small steps compound.",
    Tone.COACH: "You've got this—one small step at a time.",
}


# ============================================================================
# PER-TRIGGER RENDERERS
# ============================================================================

def _debt_min_missing(tone: Tone, context: NextStepContext) -> str:
    accounts = count_noun(context.debt_min_missing_count, "debt account")
    core = {
        Tone.FACTS: f"Minimum payment is missing for {accounts}.",
        Tone.GUIDED: f"Add minimum payments for {accounts} to keep your plan accurate.",
        Tone.COACH: f"Set minimum payments for {accounts} so your plan protects you first.",
    }[tone]
    # Guided and coach already say what to do
    if tone == Tone.FACTS:
        return f"{core} Add a minimum payment to keep the plan accurate."
    return core


def _left_to_budget_negative(tone: Tone, context: NextStepContext) -> str:
    amount = format_money(abs(context.left_to_budget))
    core = {
        Tone.FACTS: f"Left to budget is negative by {amount}.",
        Tone.GUIDED: f"You're over budget by {amount}.",
        Tone.COACH: f"Bring left to budget back to zero by {amount}.",
    }[tone]
    if tone == Tone.FACTS:
        return f"{core} Reduce planned outflows or add income."
    return f"{core} Adjust planned spending or income to rebalance."


def _uncategorized_txns(tone: Tone, context: NextStepContext) -> str:
    count = context.uncategorized_count
    transactions = count_noun(count, "transaction")
    core = {
        Tone.FACTS: f"{transactions} are uncategorized.",
        Tone.GUIDED: f"You have {count_noun(count, 'uncategorized transaction')}.",
        Tone.COACH: f"Let’s categorize {transactions} to keep totals accurate.",
    }[tone]
    if tone == Tone.FACTS:
        return f"{core} Categorize them to update totals."
    return f"{core} Categorize them so your totals reflect reality."


def _category_overspent(tone: Tone, context: NextStepContext) -> str:
    label = FALLBACK_CATEGORY_LABEL if context.overspent_label is None else context.overspent_label
    amount = format_money(abs(context.overspent_amount or 0))
    core = {
        Tone.FACTS: f"Most overspent: {label} by {amount}.",
        Tone.GUIDED: f"Largest overspend is {label} ({amount}).",
        Tone.COACH: f"Let’s bring {label} back on track ({amount}).",
    }[tone]
    if tone == Tone.FACTS:
        return f"{core} Review planned vs actual."
    return f"{core} Adjust planned or shift funds."


def _left_to_budget_positive(tone: Tone, context: NextStepContext) -> str:
    amount = format_money(context.left_to_budget)
    core = {
        Tone.FACTS: f"Left to budget is {amount}.",
        Tone.GUIDED: f"You have {amount} left to budget.",
        Tone.COACH: f"Great—{amount} is ready to assign.",
    }[tone]
    if tone == Tone.FACTS:
        return f"{core} Assign it to a category."
    return f"{core} Allocate it to a priority."


_RENDERERS: Dict[Trigger, Callable[[Tone, NextStepContext], str]] = {
    Trigger.DEBT_MIN_MISSING: _debt_min_missing,
    Trigger.LEFT_TO_BUDGET_NEGATIVE: _left_to_budget_negative,
    Trigger.UNCATEGORIZED_TXNS: _uncategorized_txns,
    Trigger.CATEGORY_OVERSPENT: _category_overspent,
    Trigger.LEFT_TO_BUDGET_POSITIVE: _left_to_budget_positive,
}


# ============================================================================
# PUBLIC API
# ============================================================================

def add_encouragement(body: str, tone: Union[Tone, str], encouragement: bool) -> str:
    """Append the tone's encouragement sentence when enabled."""
    if not encouragement:
        return body
    return f"{body} {ENCOURAGEMENT[Tone(tone)]}"


def _coerce_trigger(trigger: Union[Trigger, str, None]) -> Optional[Trigger]:
    if trigger is None:
        return None
    try:
        return Trigger(trigger)
    except ValueError:
        return None


def get_next_step_message(
    trigger: Union[Trigger, str, None],
    tone: Union[Tone, str],
    context: NextStepContext,
    encouragement: bool = True,
) -> Optional[NextStepMessage]:
    """
    Render the coaching message for one trigger.

    Args:
        trigger: Active condition, or None when nothing needs attention.
            Values outside the Trigger enum also yield None.
        tone: facts, guided or coach (enum member or its string value)
        context: Pre-computed budget values for the period
        encouragement: Append the tone's encouragement sentence

    Returns:
        NextStepMessage with a constant title, or None
    """
    resolved = _coerce_trigger(trigger)
    if resolved is None:
        return None

    resolved_tone = Tone(tone)
    body = _RENDERERS[resolved](resolved_tone, context)
    return NextStepMessage(
        title=NEXT_STEP_TITLE,
        body=add_encouragement(body, resolved_tone, encouragement),
    )
