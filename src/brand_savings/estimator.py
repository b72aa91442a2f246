"""
Brand Savings - Waste Estimator.

Maps monthly brand spend and four yes/no answers to an estimated monthly
waste figure. Pure and deterministic: the same questionnaire always yields
the same string.

Model:
    base = spend * 0.1667
    x 1.20  if smart bidding is used
    x 1.25  if smart bidding is used AND performance beats target
    x 1.15  unless brand CPC is within 25% of nonbrand CPC
    x 1.25  if search impression share is above 90%

Any answer other than YES (including unanswered) takes the neutral branch.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from brand_savings.errors import IntakeValidationError


# =============================================================================
# Answer Types
# =============================================================================


class Answer(str, Enum):
    """Yes/no question answer. Empty string means not answered yet."""
    UNANSWERED = ""
    YES = "yes"
    NO = "no"


class MatchType(str, Enum):
    """
    Predominant match type on the brand campaign.

    Wire values are the ones the original form posts ("yes" = broad,
    "no" = exact/phrase) and downstream automations key on them.
    """
    UNANSWERED = ""
    BROAD = "yes"
    EXACT_OR_PHRASE = "no"


# =============================================================================
# Constants
# =============================================================================

MIN_MONTHLY_SPEND = 1000
MAX_MONTHLY_SPEND = 200_000
SPEND_STEP = 1000
DEFAULT_MONTHLY_SPEND = 30_000

BASE_WASTE_RATE = Decimal("0.1667")
SMART_BIDDING_MULTIPLIER = Decimal("1.20")
PERFORMANCE_TARGET_MULTIPLIER = Decimal("1.25")
BRAND_CPC_GAP_MULTIPLIER = Decimal("1.15")
IMPRESSION_SHARE_MULTIPLIER = Decimal("1.25")
NEUTRAL = Decimal("1.00")

CENTS = Decimal("0.01")

# Fields whose change triggers a recompute (match type is display-only)
TRACKED_FIELDS = frozenset({
    "monthly_spend",
    "uses_smart_bidding",
    "beats_performance_target",
    "brand_cpc_near_nonbrand",
    "high_impression_share",
})


# =============================================================================
# Input Model
# =============================================================================


@dataclass
class QuestionnaireInput:
    """Current questionnaire values for one session."""
    monthly_spend: int = DEFAULT_MONTHLY_SPEND
    uses_smart_bidding: Answer = Answer.UNANSWERED
    beats_performance_target: Answer = Answer.UNANSWERED  # Only counts with smart bidding
    brand_cpc_near_nonbrand: Answer = Answer.UNANSWERED
    high_impression_share: Answer = Answer.UNANSWERED
    match_type_predominant: MatchType = MatchType.UNANSWERED

    def answers(self) -> dict[str, str]:
        """Wire values of the five questions, keyed by question id."""
        return {
            "smart_bidding": self.uses_smart_bidding.value,
            "performance_target": self.beats_performance_target.value,
            "brand_cpc": self.brand_cpc_near_nonbrand.value,
            "impression_share": self.high_impression_share.value,
            "match_type": self.match_type_predominant.value,
        }


def validate_monthly_spend(amount: int) -> int:
    """Check the slider domain: [1000, 200000] in steps of 1000."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise IntakeValidationError(f"Monthly spend must be an integer, got {amount!r}")
    if not MIN_MONTHLY_SPEND <= amount <= MAX_MONTHLY_SPEND:
        raise IntakeValidationError(
            f"Monthly spend must be between {MIN_MONTHLY_SPEND} and {MAX_MONTHLY_SPEND}"
        )
    if amount % SPEND_STEP:
        raise IntakeValidationError(f"Monthly spend must be a multiple of {SPEND_STEP}")
    return amount


# =============================================================================
# Estimation
# =============================================================================


def _multipliers(data: QuestionnaireInput) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    smart_bidding = data.uses_smart_bidding == Answer.YES
    return (
        SMART_BIDDING_MULTIPLIER if smart_bidding else NEUTRAL,
        PERFORMANCE_TARGET_MULTIPLIER
        if smart_bidding and data.beats_performance_target == Answer.YES
        else NEUTRAL,
        NEUTRAL if data.brand_cpc_near_nonbrand == Answer.YES else BRAND_CPC_GAP_MULTIPLIER,
        IMPRESSION_SHARE_MULTIPLIER if data.high_impression_share == Answer.YES else NEUTRAL,
    )


def estimate_amount(data: QuestionnaireInput) -> Decimal:
    """Estimated monthly waste in dollars, rounded half-up to cents."""
    amount = Decimal(data.monthly_spend) * BASE_WASTE_RATE
    for multiplier in _multipliers(data):
        amount *= multiplier
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal) -> str:
    """Format as US dollars, e.g. 9376.88 -> '$9,376.88'."""
    return f"${amount:,.2f}"


def estimate(data: QuestionnaireInput) -> str:
    """Estimated monthly waste as a display string."""
    return format_currency(estimate_amount(data))
