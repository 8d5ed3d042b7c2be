import pytest

from nextstep.schemas.nextstep import NextStepContext, NextStepMessage, Tone, Trigger
from nextstep.tools.nextstep_copy import (
    ENCOURAGEMENT,
    NEXT_STEP_TITLE,
    add_encouragement,
    get_next_step_message,
)

COACH_ENCOURAGEMENT = "You've got this—one small step at a time."


class TestEveryTriggerRenders:
    @pytest.mark.parametrize('trigger', list(Trigger))
    @pytest.mark.parametrize('tone', list(Tone))
    def test_message_has_title_and_body(self, trigger, tone, busy_context):
        message = get_next_step_message(trigger, tone, busy_context)
        assert isinstance(message, NextStepMessage)
        assert message.title == NEXT_STEP_TITLE
        assert message.body.strip()

    @pytest.mark.parametrize('tone', list(Tone))
    def test_string_values_are_accepted(self, tone, busy_context):
        by_enum = get_next_step_message(Trigger.UNCATEGORIZED_TXNS, tone, busy_context)
        by_str = get_next_step_message('UNCATEGORIZED_TXNS', tone.value, busy_context)
        assert by_enum == by_str


class TestNoTrigger:
    @pytest.mark.parametrize('tone', list(Tone))
    @pytest.mark.parametrize('encouragement', [True, False])
    def test_none_trigger_returns_none(self, tone, encouragement, busy_context, empty_context):
        assert get_next_step_message(None, tone, busy_context, encouragement) is None
        assert get_next_step_message(None, tone, empty_context, encouragement) is None

    @pytest.mark.parametrize('trigger', ['BUDGET_EXPLODED', '', 'left_to_budget_positive', 42])
    def test_unknown_trigger_returns_none(self, trigger, busy_context):
        assert get_next_step_message(trigger, Tone.FACTS, busy_context) is None


class TestExactCopy:
    def test_debt_min_missing(self):
        context = NextStepContext(debt_min_missing_count=2)
        bodies = {
            tone: get_next_step_message(Trigger.DEBT_MIN_MISSING, tone, context, False).body
            for tone in Tone
        }
        assert bodies[Tone.FACTS] == (
            "Minimum payment is missing for 2 debt accounts. "
            "Add a minimum payment to keep the plan accurate."
        )
        assert bodies[Tone.GUIDED] == "Add minimum payments for 2 debt accounts to keep your plan accurate."
        assert bodies[Tone.COACH] == "Set minimum payments for 2 debt accounts so your plan protects you first."

    def test_left_to_budget_negative(self):
        context = NextStepContext(left_to_budget=-1234.5)
        render = lambda tone: get_next_step_message(
            Trigger.LEFT_TO_BUDGET_NEGATIVE, tone, context, False
        ).body
        assert render(Tone.FACTS) == (
            "Left to budget is negative by $1,234.50. Reduce planned outflows or add income."
        )
        assert render(Tone.GUIDED) == (
            "You're over budget by $1,234.50. Adjust planned spending or income to rebalance."
        )
        assert render(Tone.COACH) == (
            "Bring left to budget back to zero by $1,234.50. Adjust planned spending or income to rebalance."
        )

    def test_uncategorized_txns(self):
        context = NextStepContext(uncategorized_count=4)
        render = lambda tone: get_next_step_message(
            Trigger.UNCATEGORIZED_TXNS, tone, context, False
        ).body
        assert render(Tone.FACTS) == "4 transactions are uncategorized. Categorize them to update totals."
        assert render(Tone.GUIDED) == (
            "You have 4 uncategorized transactions. Categorize them so your totals reflect reality."
        )
        assert render(Tone.COACH) == (
            "Let’s categorize 4 transactions to keep totals accurate. "
            "Categorize them so your totals reflect reality."
        )

    def test_category_overspent(self):
        context = NextStepContext(overspent_label="Groceries", overspent_amount=-80)
        render = lambda tone: get_next_step_message(
            Trigger.CATEGORY_OVERSPENT, tone, context, False
        ).body
        assert render(Tone.FACTS) == "Most overspent: Groceries by $80.00. Review planned vs actual."
        assert render(Tone.GUIDED) == "Largest overspend is Groceries ($80.00). Adjust planned or shift funds."
        assert render(Tone.COACH) == "Let’s bring Groceries back on track ($80.00). Adjust planned or shift funds."

    def test_left_to_budget_positive(self):
        context = NextStepContext(left_to_budget=42)
        render = lambda tone: get_next_step_message(
            Trigger.LEFT_TO_BUDGET_POSITIVE, tone, context, False
        ).body
        assert render(Tone.FACTS) == "Left to budget is $42.00. Assign it to a category."
        assert render(Tone.GUIDED) == "You have $42.00 left to budget. Allocate it to a priority."
        assert render(Tone.COACH) == "Great—$42.00 is ready to assign. Allocate it to a priority."


class TestPluralization:
    @pytest.mark.parametrize('tone', list(Tone))
    def test_single_debt_account(self, tone):
        context = NextStepContext(debt_min_missing_count=1)
        body = get_next_step_message(Trigger.DEBT_MIN_MISSING, tone, context).body
        assert "1 debt account" in body
        assert "1 debt accounts" not in body

    @pytest.mark.parametrize('tone', list(Tone))
    def test_several_debt_accounts(self, tone):
        context = NextStepContext(debt_min_missing_count=2)
        assert "2 debt accounts" in get_next_step_message(Trigger.DEBT_MIN_MISSING, tone, context).body

    @pytest.mark.parametrize('tone', list(Tone))
    def test_zero_is_plural(self, tone):
        context = NextStepContext(uncategorized_count=0)
        assert "0 " in get_next_step_message(Trigger.UNCATEGORIZED_TXNS, tone, context).body
        assert "transactions" in get_next_step_message(Trigger.UNCATEGORIZED_TXNS, tone, context).body

    def test_single_uncategorized_transaction(self):
        context = NextStepContext(uncategorized_count=1)
        render = lambda tone: get_next_step_message(Trigger.UNCATEGORIZED_TXNS, tone, context, False).body
        assert render(Tone.FACTS) == "1 transaction are uncategorized. Categorize them to update totals."
        assert render(Tone.GUIDED).startswith("You have 1 uncategorized transaction.")
        assert render(Tone.COACH).startswith("Let’s categorize 1 transaction to")

    def test_several_uncategorized_transactions(self):
        context = NextStepContext(uncategorized_count=2)
        render = lambda tone: get_next_step_message(Trigger.UNCATEGORIZED_TXNS, tone, context, False).body
        assert render(Tone.FACTS).startswith("2 transactions are uncategorized.")
        assert "2 uncategorized transactions" in render(Tone.GUIDED)
        assert "2 transactions" in render(Tone.COACH)


class TestCurrency:
    @pytest.mark.parametrize('tone', list(Tone))
    def test_negative_left_to_budget_uses_absolute_value(self, tone):
        context = NextStepContext(left_to_budget=-150.5)
        body = get_next_step_message(Trigger.LEFT_TO_BUDGET_NEGATIVE, tone, context).body
        assert "$150.50" in body
        assert "-150.5" not in body
        assert "-$" not in body

    @pytest.mark.parametrize('amount', [-99.999, 99.999])
    def test_overspend_sign_is_dropped(self, amount):
        context = NextStepContext(overspent_label="Fun", overspent_amount=amount)
        body = get_next_step_message(Trigger.CATEGORY_OVERSPENT, Tone.GUIDED, context).body
        assert "($100.00)" in body
        assert "-$" not in body

    def test_thousands_separator(self):
        context = NextStepContext(left_to_budget=1234.5)
        body = get_next_step_message(Trigger.LEFT_TO_BUDGET_POSITIVE, Tone.FACTS, context).body
        assert "$1,234.50" in body

    @pytest.mark.parametrize('trigger, amount', [
        (Trigger.LEFT_TO_BUDGET_POSITIVE, 1e26),
        (Trigger.LEFT_TO_BUDGET_NEGATIVE, -1e26),
        (Trigger.LEFT_TO_BUDGET_POSITIVE, 1.5e300),
    ])
    def test_very_large_amounts_render(self, trigger, amount):
        context = NextStepContext(left_to_budget=amount)
        body = get_next_step_message(trigger, Tone.FACTS, context).body
        assert "$1" in body
        assert ",000.00" in body


class TestMissingContext:
    @pytest.mark.parametrize('tone', list(Tone))
    def test_overspent_label_falls_back(self, tone):
        context = NextStepContext(overspent_amount=25)
        body = get_next_step_message(Trigger.CATEGORY_OVERSPENT, tone, context).body
        assert "a category" in body
        assert "None" not in body
        assert "undefined" not in body

    def test_overspent_amount_falls_back_to_zero(self):
        body = get_next_step_message(Trigger.CATEGORY_OVERSPENT, Tone.FACTS, NextStepContext()).body
        assert body.startswith("Most overspent: a category by $0.00.")

    def test_empty_overspent_label_is_kept(self):
        context = NextStepContext(overspent_label="", overspent_amount=5)
        body = get_next_step_message(Trigger.CATEGORY_OVERSPENT, Tone.FACTS, context, False).body
        assert body == "Most overspent:  by $5.00. Review planned vs actual."


class TestEncouragement:
    @pytest.mark.parametrize('trigger', list(Trigger))
    @pytest.mark.parametrize('tone', list(Tone))
    def test_adds_exactly_one_sentence(self, trigger, tone, busy_context):
        with_it = get_next_step_message(trigger, tone, busy_context, True).body
        without = get_next_step_message(trigger, tone, busy_context, False).body
        assert with_it == f"{without} {ENCOURAGEMENT[tone]}"

    def test_facts_and_guided_share_a_sentence(self):
        assert add_encouragement("Body.", Tone.FACTS, True) == "Body. Small steps compound."
        assert add_encouragement("Body.", "guided", True) == "Body. Small steps compound."

    def test_coach_sentence(self):
        assert add_encouragement("Body.", Tone.COACH, True) == f"Body. {COACH_ENCOURAGEMENT}"

    def test_disabled_leaves_body_alone(self):
        assert add_encouragement("Body.", Tone.COACH, False) == "Body."

    def test_defaults_to_enabled(self, busy_context):
        body = get_next_step_message(Trigger.LEFT_TO_BUDGET_NEGATIVE, Tone.FACTS, busy_context).body
        assert body.endswith("Small steps compound.")


class TestPurity:
    def test_same_arguments_same_result(self, busy_context):
        first = get_next_step_message(Trigger.CATEGORY_OVERSPENT, Tone.COACH, busy_context)
        second = get_next_step_message(Trigger.CATEGORY_OVERSPENT, Tone.COACH, busy_context)
        assert first == second

    def test_context_is_not_mutated(self, busy_context):
        before = busy_context.model_dump()
        for trigger in Trigger:
            get_next_step_message(trigger, Tone.FACTS, busy_context)
        assert busy_context.model_dump() == before


def test_coach_positive_end_to_end():
    context = NextStepContext(
        left_to_budget=42.0,
        uncategorized_count=0,
        debt_min_missing_count=0,
    )
    message = get_next_step_message(Trigger.LEFT_TO_BUDGET_POSITIVE, Tone.COACH, context, True)
    assert "$42.00" in message.body
    assert message.body.endswith(COACH_ENCOURAGEMENT)
