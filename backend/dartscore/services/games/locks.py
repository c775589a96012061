import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class GameLockRegistry:
    """One mutex per game id, created on first use.

    The table itself is guarded by ``_guard`` so two requests racing on a game
    nobody has touched yet still end up sharing a single lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def lock_for(self, game_id: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def hold(self, game_id: Hashable) -> Iterator[None]:
        with self.lock_for(game_id):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


game_locks = GameLockRegistry()
