"""
Tool Description Constants

Following OpenAI guidance: concise "Use this when..." descriptions with explicit parameters.
"""

import textwrap

TONE_LIST = textwrap.dedent("""
- facts: neutral statement of the condition
- guided: direct, second-person instruction
- coach: warm, motivational framing
""").strip()

TRIGGER_ORDER = textwrap.dedent("""
1. DEBT_MIN_MISSING - a debt account has no minimum payment
2. LEFT_TO_BUDGET_NEGATIVE - more is allocated than is available
3. UNCATEGORIZED_TXNS - transactions without a category
4. CATEGORY_OVERSPENT - a category spent more than planned
5. LEFT_TO_BUDGET_POSITIVE - money is still waiting to be assigned
""").strip()

# ============================================================================
# GET_NEXT_STEP
# ============================================================================
GET_NEXT_STEP_DESCRIPTION = textwrap.dedent(f"""
Use this when the user asks "what should I do next?" about their budget, or after budget numbers change and a single nudge is useful.

Parameters:
- context (required): pre-computed month totals
  - left_to_budget: float, negative when over-allocated
  - uncategorized_count: int >= 0
  - debt_min_missing_count: int >= 0
  - overspent_label / overspent_amount: largest overspent category, if any
- tone (optional): one of
{TONE_LIST}
- trigger (optional): force one condition; omit to pick the most urgent:
{TRIGGER_ORDER}
- encouragement (optional): append a short encouraging sentence (default from settings)

Returns one message ({{title, body}}) or null when nothing needs attention. Show the body to the user verbatim.
""").strip()
