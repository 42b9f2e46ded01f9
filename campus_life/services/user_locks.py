"""
Per-user locks serializing read-check-write sequences inside one process.
Cross-process duplicates are caught by the check-in ledger's unique constraint.
"""
import threading
import weakref
from contextlib import contextmanager

_registry_lock = threading.Lock()
# Entries disappear once no thread holds or waits on the user's lock
_user_locks = weakref.WeakValueDictionary()


class _UserLock:
    def __init__(self):
        self._lock = threading.Lock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._lock.release()


def _get_lock(user_id: int) -> _UserLock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _UserLock()
            _user_locks[user_id] = lock
        return lock


@contextmanager
def user_lock(user_id: int):
    """Hold the user's lock for the duration of the block"""
    lock = _get_lock(user_id)
    with lock:
        yield
