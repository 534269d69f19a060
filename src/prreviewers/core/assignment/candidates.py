"""Eligible reviewer computation shared by creation, reassignment and backfill."""
from collections.abc import Collection, Iterable
from typing import Optional

from ..schemas import TeamMember, User

Member = User | TeamMember


def is_eligible(
    member: Member, exclude_user_id: Optional[str], already_assigned: Collection[str]
) -> bool:
    """Active, not the excluded user and not already on the pull request."""
    return (
        member.is_active
        and member.user_id != exclude_user_id
        and member.user_id not in already_assigned
    )


def eligible_reviewers(
    members: Iterable[Member],
    exclude_user_id: Optional[str] = None,
    already_assigned: Collection[str] = (),
) -> list[str]:
    """Ids of the members that may take a reviewer slot, in roster order.

    Args:
        members: Team roster
        exclude_user_id: The author at creation time, the departing
            reviewer at reassignment time
        already_assigned: Reviewers the pull request keeps

    Returns:
        Eligible user ids, without duplicates
    """
    result: list[str] = []
    seen: set[str] = set()
    for member in members:
        if member.user_id in seen:
            continue
        if is_eligible(member, exclude_user_id, already_assigned):
            result.append(member.user_id)
            seen.add(member.user_id)
    return result
