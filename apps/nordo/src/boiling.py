import threading
import time
from collections.abc import Callable, Iterable
from contextlib import contextmanager
from dataclasses import replace

from models import BatchState, BoilSession, Potato, SoftnessLevel

DEFAULT_BOIL_TIME = 900  # seconds a batch must boil to be fully cooked


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BoilingError(Exception):
    """Base class for boiling failures."""


class AlreadyBoiling(BoilingError):
    """A batch is still boiling; the new one was rejected."""

    def __init__(self):
        super().__init__("There are already potatoes boiling.")


class ClockError(BoilingError):
    """Elapsed boiling time could not be computed (e.g. the clock went backwards)."""

    def __init__(self):
        super().__init__("Could not compute time elapsed for boiling potatoes")


# ---------------------------------------------------------------------------
# Softness classification
# ---------------------------------------------------------------------------

def classify_softness(elapsed: float, boil_duration: float) -> SoftnessLevel:
    """
    Map elapsed boiling time to a softness level.

    Bands are inclusive lower bounds at 40%, 60%, 80% and 100% of
    `boil_duration`; a value sitting exactly on a boundary lands in the
    softer band. Comparisons are scaled by 5 so whole-second inputs never
    hit float rounding.
    """
    if elapsed < 0:
        raise ValueError("elapsed time must not be negative")
    if boil_duration < 0:
        raise ValueError("boil duration must not be negative")

    scaled = elapsed * 5
    if scaled >= boil_duration * 5:
        return SoftnessLevel.LikeButter
    if scaled >= boil_duration * 4:
        return SoftnessLevel.ReasonablySoft
    if scaled >= boil_duration * 3:
        return SoftnessLevel.StartingToSoften
    if scaled >= boil_duration * 2:
        return SoftnessLevel.StillFirm
    return SoftnessLevel.HardAsRock


# ---------------------------------------------------------------------------
# Readers/writer lock
# ---------------------------------------------------------------------------

class _ReadWriteLock:
    """
    Many concurrent readers or one writer. Waiting writers block new readers
    so a steady stream of status polls cannot starve start/collect calls.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


# ---------------------------------------------------------------------------
# Session manager
# ---------------------------------------------------------------------------

class BoilingSessionManager:
    """
    Owns the single boil session for the lifetime of the process.

    All access goes through start_boiling / query_status / collect_boiled,
    each of which runs its whole check-and-update under the session lock.
    Safe to call from any number of threads.
    """

    def __init__(
        self,
        boil_time: float = DEFAULT_BOIL_TIME,
        clock: Callable[[], float] = time.time,
        notifier=None,
    ):
        if boil_time < 0:
            raise ValueError("boil_time must not be negative")
        self.boil_time = boil_time
        self._clock = clock
        self._notifier = notifier
        self._session = BoilSession()
        self._lock = _ReadWriteLock()

    def _elapsed(self) -> float:
        try:
            elapsed = self._clock() - self._session.started_at
        except (OSError, OverflowError) as e:
            raise ClockError() from e
        if elapsed < 0:
            raise ClockError()
        return elapsed

    def _notify(self, message: str) -> None:
        if self._notifier is not None:
            self._notifier.notify(message)

    def start_boiling(self, batch: Iterable[Potato]) -> None:
        """
        Put a new batch in the pot.

        Raises AlreadyBoiling while the current batch has boiled for less
        than `boil_time`. A batch that finished but was never collected is
        replaced without being returned to anyone.
        """
        batch = [replace(p) for p in batch]
        with self._lock.write():
            if self._session.active and self._elapsed() < self.boil_time:
                raise AlreadyBoiling()
            try:
                started_at = self._clock()
            except (OSError, OverflowError) as e:
                raise ClockError() from e
            self._session.started_at = started_at
            self._session.batch = batch

        print(f"[boiling] Started boiling {len(batch)} potatoes")
        self._notify("Starting to boil potatoes")

    def query_status(self) -> SoftnessLevel | BatchState:
        """Return the softness of the current batch, or BatchState.IDLE."""
        with self._lock.read():
            if not self._session.active:
                return BatchState.IDLE
            status = classify_softness(self._elapsed(), self.boil_time)

        print(f"[boiling] The potatoes boiling status is now {status.name}")
        return status

    def collect_boiled(self, boil_duration: float | None = None) -> list[Potato] | BatchState:
        """
        Take the batch out of the pot once it has boiled for `boil_duration`
        (default: `boil_time`).

        Returns the boiled potatoes exactly once and leaves the pot idle.
        Returns BatchState.NOT_READY (session untouched) when called too
        early, and BatchState.IDLE when nothing is boiling.
        """
        if boil_duration is None:
            boil_duration = self.boil_time

        with self._lock.write():
            if not self._session.active:
                return BatchState.IDLE
            if self._elapsed() < boil_duration:
                return BatchState.NOT_READY

            potatoes = self._session.batch
            for potato in potatoes:
                potato.boiled = True
            self._session.clear()

        print(f"[boiling] Sending {len(potatoes)} boiled potatoes")
        self._notify("Sending boiled potatoes")
        return potatoes

    def snapshot(self) -> BoilSession:
        """Copy of the current session, safe to inspect without the lock."""
        with self._lock.read():
            return self._session.copy()

    def is_boiling(self) -> bool:
        with self._lock.read():
            return self._session.active
