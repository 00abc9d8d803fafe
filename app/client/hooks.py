"""
Stateful wrappers around ProfileClient calls for UI code.

Each hook exposes a RequestState (idle / loading / success / error) and never
raises: failures become an error string. When calls overlap on one hook, only
the most recently started call is allowed to update the state.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from pydantic import BaseModel

from app.client.profile_client import ProfileClient, ProfileClientError
from app.modules.marketplace.schemas import SearchFilters, SearchResult
from app.modules.profiles.schemas import ProfileResponse

logger = logging.getLogger(__name__)


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class RequestState(BaseModel):
    status: RequestStatus = RequestStatus.IDLE
    data: Optional[Any] = None
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.status == RequestStatus.LOADING


Listener = Callable[[RequestState], None]


class RequestHook:
    def __init__(self, client: ProfileClient):
        self.client = client
        self.state = RequestState()
        self._sequence = 0
        self._listeners: List[Listener] = []
        self._last_call: Optional[Callable[[], Awaitable[Any]]] = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback fired on every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: RequestState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    async def _run(self, call: Callable[[], Awaitable[Any]], fallback_error: str) -> Optional[Any]:
        self._sequence += 1
        ticket = self._sequence
        self._last_call = call
        self._set_state(RequestState(status=RequestStatus.LOADING, data=self.state.data))

        try:
            data = await call()
        except ProfileClientError as e:
            message = e.message or fallback_error
        except Exception as e:
            logger.exception("Unexpected client failure")
            message = str(e) or fallback_error
        else:
            if ticket == self._sequence:
                self._set_state(RequestState(status=RequestStatus.SUCCESS, data=data))
            return data

        if ticket == self._sequence:
            self._set_state(RequestState(status=RequestStatus.ERROR, data=self.state.data, error=message))
        return None

    async def refetch(self) -> Optional[Any]:
        """Repeat the last call. No-op before the first one."""
        if self._last_call is None:
            return None
        return await self._run(self._last_call, "Request failed")


class ProfileSearchHook(RequestHook):
    def __init__(self, client: ProfileClient, filters: Optional[SearchFilters] = None):
        super().__init__(client)
        self.filters = filters or SearchFilters()

    async def search_profiles(self, filters: Optional[SearchFilters] = None) -> Optional[SearchResult]:
        if filters is not None:
            self.filters = filters
        current = self.filters
        return await self._run(lambda: self.client.search_profiles(current), "Failed to search profiles")


class ProfileHook(RequestHook):
    def __init__(self, client: ProfileClient, profile_id: Optional[str] = None):
        super().__init__(client)
        self.profile_id = profile_id

    async def fetch_profile(self, profile_id: Optional[str] = None) -> Optional[ProfileResponse]:
        target = profile_id or self.profile_id
        if not target:
            return None
        self.profile_id = target
        return await self._run(lambda: self.client.get_profile(target), "Failed to fetch profile")


class ProfileMutationsHook(RequestHook):
    async def create_profile(self, profile_data: Mapping[str, Any]) -> Optional[ProfileResponse]:
        return await self._run(lambda: self.client.create_profile(profile_data), "Failed to create profile")

    async def update_profile(self, profile_data: Mapping[str, Any]) -> Optional[ProfileResponse]:
        return await self._run(lambda: self.client.update_profile(profile_data), "Failed to update profile")
