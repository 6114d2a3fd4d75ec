"""
Match scoring and ranking.

The match percentage is a presentation heuristic derived from the
candidate's user id, not a similarity measure. It is stable for a given
id and always lies in [MIN_MATCH_PERCENTAGE, MAX_MATCH_PERCENTAGE].

Dependencies: None (pure domain layer)
System role: Candidate scoring for the skill match finder
"""

from typing import Any, Sequence

MATCH_BASE = 70
MATCH_SPREAD = 25
MATCH_MULTIPLIER = 7

MIN_MATCH_PERCENTAGE = MATCH_BASE
MAX_MATCH_PERCENTAGE = MATCH_BASE + MATCH_SPREAD - 1


def compute_match_percentage(user_id: int) -> int:
    """
    Deterministic match score for a candidate.

    Args:
        user_id: Candidate user id

    Returns:
        int: 70 + (user_id * 7) mod 25, in [70, 94]
    """
    # TODO: replace with a real similarity (proficiency overlap, mutual rating) once product signs off on the ranking change
    return MATCH_BASE + (user_id * MATCH_MULTIPLIER) % MATCH_SPREAD


def rank_candidates(candidates: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Order candidates by match percentage, best first.

    Python's sort is stable, so candidates with equal scores keep
    their discovery order.

    Args:
        candidates: Candidate dicts carrying a "match_percentage" key

    Returns:
        list[dict]: New list sorted descending by match percentage
    """
    return sorted(candidates, key=lambda c: c["match_percentage"], reverse=True)
