"""Explicit transition tables for article lifecycle and research states."""

from typing import Dict, FrozenSet, Optional, Union

from article_pipeline.database.models import ArticleStatus, ResearchState
from article_pipeline.utils.exceptions import InvalidStateTransitionError

ARTICLE_STATUS_TRANSITIONS: Dict[ArticleStatus, FrozenSet[ArticleStatus]] = {
    ArticleStatus.PENDING: frozenset({ArticleStatus.PROCESSED}),
    # Regeneration keeps a processed article processed
    ArticleStatus.PROCESSED: frozenset({ArticleStatus.PROCESSED}),
}

RESEARCH_STATE_TRANSITIONS: Dict[ResearchState, FrozenSet[ResearchState]] = {
    ResearchState.IDLE: frozenset({ResearchState.SEARCHING, ResearchState.PROCESSING}),
    ResearchState.SEARCHING: frozenset({ResearchState.REVIEWING, ResearchState.IDLE}),
    ResearchState.REVIEWING: frozenset({ResearchState.SEARCHING, ResearchState.PROCESSING}),
    ResearchState.PROCESSING: frozenset(
        {ResearchState.COMPLETE, ResearchState.REVIEWING, ResearchState.IDLE}
    ),
    ResearchState.COMPLETE: frozenset({ResearchState.PROCESSING, ResearchState.SEARCHING}),
}

# Research states marking an operation in flight
IN_FLIGHT_RESEARCH_STATES: FrozenSet[ResearchState] = frozenset(
    {ResearchState.SEARCHING, ResearchState.PROCESSING}
)


def _research_state(value: Optional[Union[str, ResearchState]]) -> ResearchState:
    if not value:
        return ResearchState.IDLE
    return ResearchState(value)


def check_status_transition(
    current: Union[str, ArticleStatus],
    target: Union[str, ArticleStatus],
) -> ArticleStatus:
    """
    Validate an article status transition.

    Returns:
        Target status

    Raises:
        InvalidStateTransitionError: If the transition is not allowed
    """
    current_status = ArticleStatus(current)
    target_status = ArticleStatus(target)
    if target_status not in ARTICLE_STATUS_TRANSITIONS[current_status]:
        raise InvalidStateTransitionError("status", current_status.value, target_status.value)
    return target_status


def check_research_transition(
    current: Optional[Union[str, ResearchState]],
    target: Union[str, ResearchState],
) -> ResearchState:
    """
    Validate a research state transition, absent current state meaning idle.

    Returns:
        Target research state

    Raises:
        InvalidStateTransitionError: If the transition is not allowed
    """
    current_state = _research_state(current)
    target_state = ResearchState(target)
    if target_state not in RESEARCH_STATE_TRANSITIONS[current_state]:
        raise InvalidStateTransitionError("research", current_state.value, target_state.value)
    return target_state


def is_research_in_flight(current: Optional[Union[str, ResearchState]]) -> bool:
    """Whether a search or generation is already running for the article."""
    return _research_state(current) in IN_FLIGHT_RESEARCH_STATES
