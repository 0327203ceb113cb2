"""Rules library — zone model and confidence-scored eligibility evaluation.

Public API:
    - ZoneType: Closed set of zone criteria
    - Zone: Immutable zone value
    - EligibilityRuleEngine: Verdict, confidence and reason from matched zones
    - EligibilityResult: Evaluation outcome
    - calculate_confidence_score / zone_base_score: Scoring primitives
    - rank_zones / deduplicate_zones: Zone ordering helpers
"""

from eligibility_api.lib.rules.engine import (
    NO_ZONES_REASON,
    RULES_DISABLED_REASON,
    EligibilityCandidate,
    EligibilityResult,
    EligibilityRuleEngine,
    calculate_confidence_score,
    deduplicate_zones,
    rank_zones,
    zone_base_score,
)
from eligibility_api.lib.rules.zones import Zone, ZoneType

__all__ = [
    "NO_ZONES_REASON",
    "RULES_DISABLED_REASON",
    "EligibilityCandidate",
    "EligibilityResult",
    "EligibilityRuleEngine",
    "Zone",
    "ZoneType",
    "calculate_confidence_score",
    "deduplicate_zones",
    "rank_zones",
    "zone_base_score",
]
