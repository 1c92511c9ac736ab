"""
Design (store.py)
- Purpose: Own the current user list and the single operation that populates it,
           and publish every change to subscribers (the screen).
- Inputs: A UsersClient, a run_async(fn) that runs fn off the UI thread, and a
          dispatch(fn) that runs fn back on the UI thread.
- Outputs: StoreSnapshot values via snapshot() and subscriber callbacks.
- Side effects: fetch_users() issues one HTTP GET on a worker; results replace users.
- Thread-safety: State is only mutated inside dispatched completions (UI thread).
                 The in-flight/closed flags are guarded by a lock because fetch_users()
                 and the worker may touch them from different threads.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

from .api import UsersClient
from .errors import FetchError
from .models import User

logger = logging.getLogger(__name__)


class LoadState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable view of the store handed to subscribers."""
    users: Tuple[User, ...] = ()
    state: LoadState = LoadState.IDLE
    last_error: Optional[FetchError] = None

    @property
    def is_empty(self) -> bool:
        return not self.users


Callback = Callable[[StoreSnapshot], None]


class Subscription:
    """
    Handle returned by UserStore.subscribe(). dispose() (or leaving a with-block)
    stops delivery; calling it more than once is harmless.
    """

    def __init__(self, store: "UserStore", callback: Callback):
        self._store = store
        self.callback = callback
        self.active = True

    def dispose(self) -> None:
        if self.active:
            self.active = False
            self._store._unsubscribe(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


def start_daemon_thread(fn: Callable[[], None]) -> None:
    threading.Thread(target=fn, name="user-fetch", daemon=True).start()


def call_inline(fn: Callable[[], None]) -> None:
    fn()


class UserStore:
    """
    Design (UserStore)
    - State:
        _snapshot: current StoreSnapshot (users + load state), replaced wholesale
        _subscribers: list of active Subscription handles
        _in_flight: True while a fetch is running; further fetches are ignored
        _closed: set by close(); late completions are dropped
        _lock: threading.Lock protecting _in_flight/_closed
    - Public methods:
        load(): first fetch, called once by whoever wires store to screen
        fetch_users(): start a fetch unless one is already running
        subscribe(): register for change notifications
        close(): stop notifications and release the HTTP session
    """

    def __init__(self, client: Optional[UsersClient] = None, *,
                 dispatch: Callable[[Callable[[], None]], None],
                 run_async: Callable[[Callable[[], None]], None] = start_daemon_thread):
        """
        dispatch(fn) must run fn on the UI thread (e.g. root.after(0, fn)). Worker results
        are applied, and subscribers called, only from inside dispatch.
        """
        self.client = client if client is not None else UsersClient()
        self._run_async = run_async
        self._dispatch = dispatch
        self._lock = threading.Lock()
        self._snapshot = StoreSnapshot()
        self._subscribers: List[Subscription] = []
        self._in_flight = False
        self._closed = False

    # -------- Read access --------

    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def users(self) -> Tuple[User, ...]:
        return self._snapshot.users

    @property
    def state(self) -> LoadState:
        return self._snapshot.state

    @property
    def last_error(self) -> Optional[FetchError]:
        return self._snapshot.last_error

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    # -------- Subscriptions --------

    def subscribe(self, callback: Callback) -> Subscription:
        """
        Purpose: Register callback(snapshot) for every state change.
        Outputs: Subscription handle; dispose() it when the subscriber goes away.
        Thread-safety: UI thread only (callbacks also run on the UI thread).
        """
        sub = Subscription(self, callback)
        if not self._closed:
            self._subscribers.append(sub)
        else:
            sub.active = False
        return sub

    def _unsubscribe(self, sub: Subscription) -> None:
        if sub in self._subscribers:
            self._subscribers.remove(sub)

    def _publish(self, snapshot: StoreSnapshot) -> None:
        self._snapshot = snapshot
        for sub in list(self._subscribers):
            try:
                sub.callback(snapshot)
            except Exception:
                logger.exception("Subscriber %r failed", sub.callback)

    # -------- Fetching --------

    def load(self) -> bool:
        """Initial fetch; the constructor never touches the network."""
        return self.fetch_users()

    def fetch_users(self) -> bool:
        """
        Purpose: Start one fetch of the user list.
        Outputs: True if a request was started; False if the store is closed or a
                 fetch is already in flight (the new call is ignored, not queued).
        Side effects: state -> LOADING now; LOADED/FAILED once the worker finishes.
                      users is replaced only on success.
        Thread-safety: Call from the UI thread.
        """
        with self._lock:
            if self._closed:
                logger.debug("fetch_users() on a closed store ignored")
                return False
            if self._in_flight:
                logger.debug("fetch already in flight; request ignored")
                return False
            self._in_flight = True

        prev = self._snapshot
        self._publish(StoreSnapshot(prev.users, LoadState.LOADING, prev.last_error))
        try:
            self._run_async(self._worker)
        except Exception as exc:
            logger.exception("Could not start the fetch worker")
            with self._lock:
                self._in_flight = False
            self._publish(StoreSnapshot(prev.users, LoadState.FAILED,
                                        FetchError(str(exc) or type(exc).__name__)))
            return False
        return True

    def _worker(self) -> None:
        try:
            users = self.client.fetch_users()
        except FetchError as exc:
            logger.warning("Error fetching users: %s", exc)
            outcome = partial(self._finish, None, exc)
        except Exception as exc:
            logger.exception("Unexpected error fetching users")
            outcome = partial(self._finish, None, FetchError(str(exc) or type(exc).__name__))
        else:
            logger.info("Fetched %d users", len(users))
            outcome = partial(self._finish, users, None)
        self._dispatch(outcome)

    def _finish(self, users: Optional[List[User]], error: Optional[FetchError]) -> None:
        """Apply a worker result; runs on the UI thread via dispatch."""
        with self._lock:
            self._in_flight = False
            if self._closed:
                return
        prev = self._snapshot
        if error is None:
            self._publish(StoreSnapshot(tuple(users or ()), LoadState.LOADED, None))
        else:
            self._publish(StoreSnapshot(prev.users, LoadState.FAILED, error))

    # -------- Lifetime --------

    def close(self) -> None:
        """
        Purpose: Tear the store down. Pending completions are discarded, subscribers
                 dropped and the HTTP session closed. Safe to call twice.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for sub in list(self._subscribers):
            sub.active = False
        self._subscribers.clear()
        self.client.close()
