"""RenderLoop — poll-and-reconcile driver for one game session.

Two states: IDLE and REFRESHING. ``activate()`` starts a fetch only from
IDLE; activations that arrive while a fetch is in flight are coalesced into
a single follow-up fetch, so at most one request per session is ever
outstanding. Each completed fetch replaces the previous view wholesale.

``close()`` and ``switch_session()`` bump a generation counter. A fetch that
completes under an older generation is discarded and never rendered.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable

from teamwordle.board.derive import BoardView, derive_view
from teamwordle.core.models import ContractViolation, GameSessionDescriptor
from teamwordle.core.session import GameSessionClient
from teamwordle.core.transport import RequestError

logger = logging.getLogger(__name__)

RenderCallback = Callable[[BoardView | None, str | None], None]


class LoopState(Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RenderLoop:
    """Owns the last derived view for one observer in one session.

    ``on_render(view, notice)`` is called after every committed fetch with
    the latest good view (None before the first success) and the notice from
    a failed request (None after a success).
    """

    def __init__(
        self,
        client: GameSessionClient,
        descriptor: GameSessionDescriptor,
        observer_id: str,
        on_render: RenderCallback | None = None,
        game_over: bool = False,
    ):
        self._client = client
        self._descriptor = descriptor
        self._observer_id = observer_id
        self._on_render = on_render
        self._game_over = game_over

        # Re-entrant so on_render may read properties while we hold it
        self._lock = threading.RLock()
        self._state = LoopState.IDLE
        self._generation = 0
        self._pending = False
        self._closed = False
        self._view: BoardView | None = None
        self._notice: str | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def view(self) -> BoardView | None:
        return self._view

    @property
    def notice(self) -> str | None:
        return self._notice

    @property
    def descriptor(self) -> GameSessionDescriptor:
        return self._descriptor

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def game_over(self) -> bool:
        return self._game_over

    def set_game_over(self, game_over: bool) -> None:
        """Takes effect on the next fetch."""
        self._game_over = game_over

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self) -> bool:
        """Fetch and re-render. Returns False if coalesced or closed."""
        with self._lock:
            if self._closed:
                return False
            if self._state is LoopState.REFRESHING:
                self._pending = True
                logger.debug("Fetch in flight for %s, coalescing", self._descriptor.area_label)
                return False
            self._state = LoopState.REFRESHING
            generation = self._generation
            descriptor = self._descriptor

        self._refresh(generation, descriptor)
        return True

    def submit_guess(self, word: str) -> bool:
        """Submit a guess for the observer's team, then refresh at once.

        Returns False if the service rejected the guess; the rejection
        message is kept in ``notice``.
        """
        word = word.strip().upper()
        if not word:
            raise ValueError("guess must not be empty")
        with self._lock:
            if self._closed:
                return False
            descriptor = self._descriptor

        try:
            self._client.submit_action(
                descriptor, {"playerID": self._observer_id, "guess": word}
            )
        except RequestError as e:
            logger.warning("Guess %s rejected: %s", word, e.message)
            with self._lock:
                if descriptor == self._descriptor and not self._closed:
                    self._notice = e.message
                    self._render()
            return False

        self.activate()
        return True

    def switch_session(self, descriptor: GameSessionDescriptor) -> None:
        """Point the loop at another game. Any in-flight fetch is discarded."""
        with self._lock:
            self._generation += 1
            self._descriptor = descriptor
            self._state = LoopState.IDLE
            self._pending = False
            self._view = None
            self._notice = None

    def close(self) -> None:
        """Tear down. Any in-flight fetch is discarded; later calls are no-ops."""
        with self._lock:
            self._generation += 1
            self._closed = True
            self._state = LoopState.IDLE
            self._pending = False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh(self, generation: int, descriptor: GameSessionDescriptor) -> None:
        while True:
            view = None
            notice = None
            try:
                snapshot = self._client.fetch_state(descriptor)
                view = derive_view(snapshot, self._observer_id, self._game_over)
            except RequestError as e:
                logger.warning("Fetching state for %s failed: %s", descriptor.area_label, e.message)
                notice = e.message
            except ContractViolation as e:
                with self._lock:
                    if generation != self._generation:
                        logger.debug("Discarding stale malformed fetch for %s: %s", descriptor.area_label, e)
                        return
                    self._state = LoopState.IDLE
                    self._pending = False
                logger.error("Snapshot for %s violates the data model: %s", descriptor.area_label, e)
                raise

            with self._lock:
                if generation != self._generation:
                    logger.debug("Discarding stale fetch for %s", descriptor.area_label)
                    return
                if view is not None:
                    self._view = view
                    self._notice = None
                else:
                    self._notice = notice

                rerun = self._pending
                self._pending = False
                if not rerun:
                    self._state = LoopState.IDLE
                try:
                    self._render()
                except Exception:
                    self._state = LoopState.IDLE
                    raise
                if not rerun:
                    return

    def _render(self) -> None:
        if self._on_render is not None:
            self._on_render(self._view, self._notice)


class Poller:
    """Activates a RenderLoop on a fixed interval from a daemon thread.

    Stops on ``stop()``, when the loop is closed, or on any exception out of
    ``activate()`` (a ContractViolation or a failing ``on_render``), which is
    kept in ``error`` for the owner to report.
    """

    def __init__(self, loop: RenderLoop, interval_s: float = 1.0):
        self._loop = loop
        self._interval_s = interval_s
        self._stop = threading.Event()
        self.error: Exception | None = None
        self._thread = threading.Thread(
            target=self._run, daemon=True, name="teamwordle-poller",
        )

    def start(self) -> None:
        self._thread.start()

    def stop(self, timeout_s: float | None = None) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout_s)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.is_set() and not self._loop.closed:
            try:
                self._loop.activate()
            except ContractViolation as e:
                self.error = e
                return
            except Exception as e:
                logger.exception("Render loop for %s failed", self._loop.descriptor.area_label)
                self.error = e
                return
            self._stop.wait(self._interval_s)
