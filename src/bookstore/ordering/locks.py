"""Per-user critical sections.

Cart mutations and checkout for one user run one at a time inside this
process; different users never wait on each other. The lock is held around
``current_domain.process`` so that it spans the whole Unit of Work, commit
included.
"""

import threading
from weakref import WeakValueDictionary

from protean.utils.globals import current_domain


class UserLock:
    __slots__ = ("_lock", "__weakref__")

    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info):
        self._lock.release()

    def locked(self) -> bool:
        return self._lock.locked()


_locks: "WeakValueDictionary[str, UserLock]" = WeakValueDictionary()
_registry_guard = threading.Lock()


def lock_for(user_id) -> UserLock:
    """The lock serialising ``user_id``'s cart, alive while anybody holds a reference."""
    key = str(user_id)
    with _registry_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = UserLock()
            _locks[key] = lock
        return lock


def process_serialized(user_id, command):
    """Process ``command`` synchronously while holding ``user_id``'s lock."""
    with lock_for(user_id):
        return current_domain.process(command, asynchronous=False)
