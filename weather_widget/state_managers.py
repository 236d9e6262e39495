"""State managers for handling application-wide mutable state.

This module provides task-safe state management using asyncio.Lock
for async operations. All state managers inherit from StateManager ABC.
"""

import asyncio
from abc import ABC, abstractmethod
from collections import OrderedDict

from weather_widget.logging_config import get_logger, log_with_context
from weather_widget.models.state import Failed, FetchResult, Idle, Loaded, Loading, RequestState, settled_state

logger = get_logger(__name__)


class StateManager(ABC):
    """Base class for all state managers.

    State managers provide task-safe access to mutable application state.
    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class WeatherStateManager(StateManager):
    """Owns the widget's RequestState.

    The state only changes through begin_fetch, complete_fetch and reject.
    Every fetch gets a sequence token; a completion only commits when its
    token is still the latest one issued, so a slow response can never
    overwrite the result of a request started after it.
    """

    def __init__(self, initial: RequestState | None = None):
        """Initialize the weather state manager.

        Args:
            initial: Settled state to start from; Loading is never carried over
        """
        self._initial: RequestState = initial if isinstance(initial, (Loaded, Failed)) else Idle()
        self._state: RequestState = self._initial
        self._sequence: int = 0
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Initialize the weather state manager."""
        async with self._lock:
            self._state = self._initial

    async def cleanup(self) -> None:
        """Cleanup resources."""
        # Drop state and invalidate anything still in flight
        async with self._lock:
            self._sequence += 1
            self._state = Idle()

    async def get_state(self) -> RequestState:
        """Get the current request state."""
        async with self._lock:
            return self._state

    async def begin_fetch(self) -> int:
        """Move to Loading, clearing any previous snapshot or error.

        Returns:
            Sequence token to pass to complete_fetch
        """
        async with self._lock:
            self._sequence += 1
            self._state = Loading()
            return self._sequence

    async def complete_fetch(self, token: int, result: FetchResult) -> bool:
        """Commit the outcome of a fetch if it is still the latest one.

        Args:
            token: Token returned by begin_fetch
            result: WeatherSnapshot on success, Failed on failure

        Returns:
            True if the result was committed, False if it was stale and dropped
        """
        async with self._lock:
            if token != self._sequence:
                log_with_context(
                    logger,
                    "info",
                    "Discarding stale weather response",
                    token=token,
                    latest_token=self._sequence,
                    event_type="weather_stale_response",
                )
                return False

            self._state = settled_state(result)
            return True

    async def reject(self, message: str) -> None:
        """Fail a request locally, before it reaches the network.

        Counts as a new request, so older in-flight fetches can no longer commit.
        """
        async with self._lock:
            self._sequence += 1
            self._state = Failed(message=message)


class WidgetSessionRegistry(StateManager):
    """One WeatherStateManager per browser session.

    Visitors never see each other's searches. The startup location lookup
    writes into ``seed``; a session created afterwards starts from the
    seed's settled state, and sessions created earlier are unaffected.
    The least recently used session is dropped once ``max_sessions`` is reached.
    """

    def __init__(self, max_sessions: int = 1000):
        """Initialize the session registry."""
        self.seed = WeatherStateManager()
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, WeatherStateManager] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    async def initialize(self) -> None:
        """Initialize the registry and its seed state."""
        await self.seed.initialize()

    async def cleanup(self) -> None:
        """Drop every session and invalidate in-flight fetches."""
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for manager in sessions:
            await manager.cleanup()
        await self.seed.cleanup()

    async def get_manager(self, session_id: str) -> WeatherStateManager:
        """Get the state manager for a session, creating it on first use."""
        async with self._lock:
            manager = self._sessions.get(session_id)
            if manager is not None:
                self._sessions.move_to_end(session_id)
                return manager

            manager = WeatherStateManager(initial=await self.seed.get_state())
            self._sessions[session_id] = manager
            if len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)
                log_with_context(
                    logger,
                    "debug",
                    "Evicted least recently used widget session",
                    session_count=len(self._sessions),
                    event_type="widget_session_evicted",
                )
            return manager
