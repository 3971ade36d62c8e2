"""The Store: holds the current snapshot and applies transitions one at a time."""

from __future__ import annotations

from taskflow import log
from taskflow.clock import Clock, IdFactory, make_id_factory, system_clock
from taskflow.storage import PersistenceAdapter
from taskflow.tasks.actions import Action, SetAll
from taskflow.tasks.model import Snapshot, Stage
from taskflow.tasks.seed import SEED_STAGES
from taskflow.tasks.transitions import MAX_ID_ATTEMPTS, apply


class Store:
    """Authoritative task/stage state.

    Every dispatch produces a new immutable :class:`Snapshot`; the previous
    one is never modified, so readers holding an old snapshot are unaffected.
    After a change the snapshot's tasks are handed to the persistence
    adapter. A failed save leaves the in-memory state in place.

    Usage::

        store = Store.open(adapter)
        store.dispatch(AddTask(draft))
        store.snapshot.tasks
    """

    def __init__(
        self,
        snapshot: Snapshot,
        persistence: PersistenceAdapter | None = None,
        *,
        clock: Clock = system_clock,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._snapshot = snapshot
        self._persistence = persistence
        self._clock = clock
        self._new_id = id_factory or make_id_factory(clock)
        # ids ever held by this store; a deleted task's id is never reissued
        self._issued: set[str] = set(snapshot.task_ids())

    @classmethod
    def open(
        cls,
        persistence: PersistenceAdapter,
        *,
        stages: tuple[Stage, ...] = SEED_STAGES,
        clock: Clock = system_clock,
        id_factory: IdFactory | None = None,
    ) -> Store:
        """Build a store from the seed stages and whatever *persistence* loads."""
        store = cls(
            Snapshot(tasks=(), stages=tuple(stages)),
            persistence,
            clock=clock,
            id_factory=id_factory,
        )
        store.dispatch(SetAll(persistence.load()))
        log.debug(f"Store ready with {len(store.snapshot.tasks)} task(s)")
        return store

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def last_save_error(self) -> Exception | None:
        if self._persistence is None:
            return None
        return self._persistence.last_error

    def dispatch(self, action: Action) -> Snapshot:
        """Apply *action*, persist the result, and return the new snapshot."""
        new = apply(self._snapshot, action, now=self._clock(), new_id=self._next_id)
        if new is self._snapshot:
            return new
        self._snapshot = new
        self._issued.update(new.task_ids())
        if self._persistence is not None:
            self._persistence.save(new.tasks)
        return new

    def _next_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._new_id()
            if candidate not in self._issued:
                return candidate
            log.debug(f"Id {candidate} was used before in this session; retrying")
        raise RuntimeError(f"Could not generate an unused task id after {MAX_ID_ATTEMPTS} attempts")
