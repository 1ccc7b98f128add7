from __future__ import annotations

import signal
from typing import TYPE_CHECKING

import pytest

from .._mask import has_sigmask

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _preserve_thread_mask() -> Iterator[None]:
    # Tests block signals by hand to set up their starting state; put the
    # runner's mask back no matter how the test went.
    if not has_sigmask():
        yield
        return
    saved = signal.pthread_sigmask(signal.SIG_BLOCK, ())
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, saved)


@pytest.fixture
def delivered() -> Iterator[list[int]]:
    """Record SIGUSR1/SIGUSR2 deliveries instead of dying from them."""
    if not has_sigmask():
        pytest.skip("needs pthread_sigmask")
    record: list[int] = []

    def handler(signum: int, frame: object) -> None:
        record.append(signum)

    signums = (signal.SIGUSR1, signal.SIGUSR2)
    original_handlers = {signum: signal.signal(signum, handler) for signum in signums}
    try:
        yield record
    finally:
        for signum, original_handler in original_handlers.items():
            signal.signal(signum, original_handler)
