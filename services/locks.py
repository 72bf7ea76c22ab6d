"""
services/locks.py

수강(Enrollment) 단위 잠금.
같은 수강에 대한 점수/출결 쓰기는 커밋까지 한 번에 하나만 진행되고,
서로 다른 수강에 대한 쓰기는 서로 기다리지 않음.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator

_registry_lock = threading.Lock()
_locks: Dict[int, threading.Lock] = {}


def _lock_for(enrollment_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _locks.get(enrollment_id)
        if lock is None:
            lock = _locks[enrollment_id] = threading.Lock()
        return lock


@contextmanager
def enrollment_lock(enrollment_id: int) -> Iterator[None]:
    lock = _lock_for(enrollment_id)
    with lock:
        yield


@contextmanager
def enrollment_locks(enrollment_ids: Iterable[int]) -> Iterator[None]:
    """여러 수강을 한 트랜잭션에서 다룰 때 사용 (id 오름차순으로 잡아 교착 방지)"""
    ordered = sorted(set(enrollment_ids))
    acquired = []
    try:
        for enrollment_id in ordered:
            lock = _lock_for(enrollment_id)
            lock.acquire()
            acquired.append(lock)
        yield
    finally:
        for lock in reversed(acquired):
            lock.release()


def discard_enrollment_lock(enrollment_id: int):
    """삭제된 수강의 잠금을 레지스트리에서 제거"""
    with _registry_lock:
        _locks.pop(enrollment_id, None)
