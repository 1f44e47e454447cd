import secrets
import threading
from collections import OrderedDict
from collections.abc import Callable

from contact_quality.logging.logger import Log
from contact_quality.workflow.controller import WorkflowController


class SessionStore:
    """Process-local map of browser session id -> WorkflowController.

    Holds at most ``max_sessions`` controllers; the least recently used one
    is dropped when a new session would exceed that. The lock guards the
    mapping only; work on a controller happens outside it.
    """

    def __init__(
        self,
        controller_factory: Callable[[], WorkflowController],
        max_sessions: int = 1000,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._controller_factory = controller_factory
        self._max_sessions = max_sessions
        self._controllers: OrderedDict[str, WorkflowController] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def new_session_id() -> str:
        return secrets.token_urlsafe(16)

    def get(self, session_id: str) -> WorkflowController:
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
                return controller
            controller = self._controller_factory()
            self._controllers[session_id] = controller
            while len(self._controllers) > self._max_sessions:
                evicted, _ = self._controllers.popitem(last=False)
                Log.debug(f"Evicted idle session {evicted}")
            return controller

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._controllers.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._controllers

    def __len__(self) -> int:
        with self._lock:
            return len(self._controllers)
