"""Zone-based eligibility rule engine.

Turns the zones matched for an address into a yes/no verdict, a confidence
score in [0, 1] and a reason. Pure and synchronous: no I/O, no shared state.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger

from eligibility_api.lib.rules.zones import Zone, ZoneType

RULES_DISABLED_REASON = "Rules disabled - automatically eligible"
NO_ZONES_REASON = "Address is not in any eligible service area"

PRIORITY_WEIGHT = 0.1


class EligibilityCandidate(Protocol):
    """Address fields the rule engine reads."""

    zip_code: str | None
    city: str | None
    state: str | None
    latitude: float | None
    longitude: float | None


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of a rule evaluation."""

    eligible: bool
    reason: str
    confidence_score: float
    matched_zone_names: list[str] = field(default_factory=list)


def deduplicate_zones(zones: Iterable[Zone]) -> list[Zone]:
    """Drop repeated zones, keeping the first occurrence.

    Zones with an ``id`` are matched on it; zones without one on identity.
    """
    seen: set[object] = set()
    unique: list[Zone] = []
    for zone in zones:
        marker = zone.id if zone.id is not None else id(zone)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(zone)
    return unique


def rank_zones(zones: Iterable[Zone]) -> list[Zone]:
    """De-duplicate and sort zones by descending priority, ties in input order."""
    return sorted(deduplicate_zones(zones), key=lambda z: z.priority, reverse=True)


def zone_base_score(candidate: EligibilityCandidate, zone: Zone) -> float:
    """Score a single zone against the candidate before priority weighting.

    Returns 0.0 when the zone's own criteria do not contain the candidate's
    field, even if a repository query returned it.

    Raises:
        ValueError: If the zone type has no scoring rule.
    """
    match zone.zone_type:
        case ZoneType.ZIP_CODE:
            return 1.0 if candidate.zip_code in zone.zip_codes else 0.0
        case ZoneType.CITY:
            return 0.8 if candidate.city in zone.cities else 0.0
        case ZoneType.STATE:
            return 0.6 if candidate.state in zone.states else 0.0
        case ZoneType.COORDINATES:
            if candidate.latitude is None or candidate.longitude is None:
                return 0.0
            return 0.9 if zone.contains_point(candidate.latitude, candidate.longitude) else 0.0
        case ZoneType.CUSTOM:
            return 0.7
        case _:
            msg = f"No scoring rule for zone type: {zone.zone_type!r}"
            raise ValueError(msg)


def calculate_confidence_score(candidate: EligibilityCandidate, zones: list[Zone]) -> float:
    """Combine per-zone scores into a confidence in [0, 1].

    Each zone score is weighted by ``1 + priority * 0.1``. The maximum and the
    sum are tracked in a single pass; the result is the mean of the average
    and the maximum, clamped only at the end.
    """
    if not zones:
        return 0.0

    base_score_sum = 0.0
    max_score = 0.0
    for zone in zones:
        score = zone_base_score(candidate, zone) * (1.0 + zone.priority * PRIORITY_WEIGHT)
        if score > max_score:
            max_score = score
        base_score_sum += score

    final_score = ((base_score_sum / len(zones)) + max_score) / 2.0
    return min(1.0, max(0.0, final_score))


class EligibilityRuleEngine:
    """Evaluates matched zones into an eligibility verdict.

    Args:
        rules_enabled: When False every address is eligible with confidence 1.0.
        min_confidence_score: Threshold a confidence must reach to be eligible.
    """

    def __init__(self, rules_enabled: bool = True, min_confidence_score: float = 0.5) -> None:
        self.rules_enabled = rules_enabled
        self.min_confidence_score = min_confidence_score

    def evaluate(self, candidate: EligibilityCandidate, matched_zones: Iterable[Zone]) -> EligibilityResult:
        """Evaluate the zones matched for an address.

        Args:
            candidate: Address fields (zip, city, state, coordinates).
            matched_zones: Union of zones returned by the zone queries; may
                contain duplicates and be in any order.

        Returns:
            EligibilityResult with matched zone names in descending priority.
        """
        zones = rank_zones(matched_zones)
        names = [z.name for z in zones]
        logger.debug(f"Evaluating eligibility for {len(zones)} matched zones")

        if not self.rules_enabled:
            logger.debug("Rules are disabled, returning default eligible result")
            return EligibilityResult(
                eligible=True,
                reason=RULES_DISABLED_REASON,
                confidence_score=1.0,
                matched_zone_names=names,
            )

        if not zones:
            logger.debug("No zones matched for address")
            return EligibilityResult(eligible=False, reason=NO_ZONES_REASON, confidence_score=0.0)

        confidence = calculate_confidence_score(candidate, zones)
        eligible = confidence >= self.min_confidence_score

        if eligible:
            reason = f"Address is eligible for service (Zone: {zones[0].name}, Confidence: {confidence * 100:.2f}%)"
        else:
            reason = (
                "Address does not meet minimum eligibility requirements "
                f"(Confidence: {confidence * 100:.2f}%, Required: {self.min_confidence_score * 100:.2f}%)"
            )

        logger.debug(f"Eligibility result: {eligible}, confidence: {confidence}, reason: {reason}")
        return EligibilityResult(
            eligible=eligible,
            reason=reason,
            confidence_score=confidence,
            matched_zone_names=names,
        )
