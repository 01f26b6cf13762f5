"""
Query coordinator.

Owns what the discovery surface shows: the active query, its results
and the loading / empty / error state. Maps every user action or deep
link to exactly one authoritative result set.

Overlapping requests are never cancelled. Each one carries a ticket
(query snapshot + generation); a response is applied only if its
ticket is still the current one, so a slow early request can never
overwrite the results of a later one.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

import structlog

from mealfinder.domain.discovery.models import (
    DeepLinkParams,
    DiscoveryMode,
    DiscoveryQuery,
    ResultState,
    SearchKind,
)
from mealfinder.domain.meal.models import Meal
from mealfinder.domain.meal.ports import IMealLookupService
from mealfinder.domain.shared.errors import MealLookupError

logger = structlog.get_logger(__name__)

StateListener = Callable[[ResultState], None]


@dataclass(frozen=True)
class _Ticket:
    """Identity of one issued request."""

    query: DiscoveryQuery
    generation: int
    previous: ResultState  # last settled state, restored on failure


class QueryCoordinator:
    """Reconciles name search, ingredient search, category, area and
    random discovery into one result state.

    Example:
        >>> coordinator = QueryCoordinator(lookup)
        >>> state = await coordinator.search("Arrabiata")
        >>> state.query.mode
        <DiscoveryMode.NAME: 'name'>
    """

    def __init__(self, lookup: IMealLookupService) -> None:
        """Initialize coordinator in the idle state.

        Args:
            lookup: Catalog lookup service
        """
        self._lookup = lookup
        self._state = ResultState.initial()
        self._settled = self._state
        self._generation = 0
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> ResultState:
        return self._state

    # ─── observers ────────────────────────────────────────────

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state-change callback.

        Returns:
            Function that unsubscribes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: ResultState) -> None:
        self._state = state
        if not state.loading:
            self._settled = state
        for listener in list(self._listeners):
            listener(state)

    # ─── user / external transitions ──────────────────────────

    async def search(self, term: str, kind: SearchKind = SearchKind.NAME) -> ResultState:
        """Search by name or main ingredient. Blank terms are ignored."""
        term = term.strip()
        if not term:
            logger.debug("Blank search ignored", kind=kind.value)
            return self._state
        return await self._transition(DiscoveryQuery.search(term, kind))

    async def select_category(self, category: Optional[str]) -> ResultState:
        """Filter by category; None clears the filter without a fetch."""
        name = category.strip() if category else ""
        if not name:
            self.reset()
            return self._state
        return await self._transition(DiscoveryQuery.category(name))

    async def select_area(self, area: str) -> ResultState:
        """Filter by area.

        There is no clearing counterpart: an area filter is only
        replaced by another transition.
        """
        name = area.strip()
        if not name:
            logger.debug("Blank area ignored")
            return self._state
        return await self._transition(DiscoveryQuery.area(name))

    async def random_pick(self) -> ResultState:
        """Show exactly one random meal, or none."""
        return await self._transition(DiscoveryQuery.random())

    async def apply_deep_link(self, params: DeepLinkParams) -> ResultState:
        """Apply out-of-band category / area parameters.

        Category wins when both are present. Supersedes any request
        in flight, exactly like the matching user action.
        """
        if params.category is not None:
            logger.info("Deep link category", category=params.category)
            return await self.select_category(params.category)
        if params.area is not None:
            logger.info("Deep link area", area=params.area)
            return await self.select_area(params.area)
        return self._state

    def reset(self) -> None:
        """Return to idle without fetching; in-flight responses go stale."""
        self._generation += 1
        state = self._state
        if state.query.is_idle and not state.loading and not state.items and state.error is None:
            return
        logger.info("Discovery reset")
        self._set_state(ResultState.initial())

    # ─── request lifecycle ────────────────────────────────────

    def _is_noop(self, query: DiscoveryQuery) -> bool:
        if query.mode == DiscoveryMode.RANDOM:
            return False
        return self._state.query == query and self._state.error is None

    def _is_current(self, ticket: _Ticket) -> bool:
        return ticket.generation == self._generation and ticket.query == self._state.query

    def _request(self, query: DiscoveryQuery) -> Awaitable[List[Meal]]:
        """Issue the single lookup call for a query's mode."""
        term = query.term or ""
        if query.mode == DiscoveryMode.NAME:
            return self._lookup.search_by_name(term)
        if query.mode == DiscoveryMode.INGREDIENT:
            return self._lookup.search_by_ingredient(term)
        if query.mode == DiscoveryMode.CATEGORY:
            return self._lookup.filter_by_category(term)
        if query.mode == DiscoveryMode.AREA:
            return self._lookup.filter_by_area(term)
        if query.mode == DiscoveryMode.RANDOM:
            return self._random_as_list()
        raise ValueError(f"No lookup for mode {query.mode.value}")

    async def _random_as_list(self) -> List[Meal]:
        meal = await self._lookup.random_pick()
        return [meal] if meal is not None else []

    async def _transition(self, query: DiscoveryQuery) -> ResultState:
        if self._is_noop(query):
            logger.debug("Query unchanged, skipping fetch", mode=query.mode.value, term=query.term)
            return self._state

        self._generation += 1
        ticket = _Ticket(query=query, generation=self._generation, previous=self._settled)
        self._set_state(ResultState(query=query, items=[], loading=True, has_queried=True))
        logger.info("Discovery request", mode=query.mode.value, term=query.term, generation=ticket.generation)

        try:
            items = await self._request(query)
        except MealLookupError as e:
            if not self._is_current(ticket):
                logger.debug("Stale failure discarded", mode=query.mode.value, term=query.term)
                return self._state

            previous = ticket.previous
            self._set_state(
                ResultState(
                    query=previous.query,
                    items=previous.items,
                    loading=False,
                    has_queried=previous.has_queried,
                    error=str(e),
                )
            )
            logger.warning("Discovery request failed", mode=query.mode.value, term=query.term, error=str(e))
            raise

        if not self._is_current(ticket):
            logger.debug(
                "Stale response discarded",
                mode=query.mode.value,
                term=query.term,
                generation=ticket.generation,
                current=self._generation,
            )
            return self._state

        self._set_state(ResultState(query=query, items=list(items), loading=False, has_queried=True))
        logger.info("Discovery results", mode=query.mode.value, term=query.term, count=len(items))
        return self._state
