from __future__ import annotations

import signal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Everything in here works on the *calling thread's* mask. POSIX only
# defines sigprocmask() for single-threaded processes; Python only exposes
# pthread_sigmask(), which is what we want anyway: masks are per-thread, and
# we must never change what sibling threads block.


def has_sigmask() -> bool:
    """Return True if this platform supports per-thread signal masks."""
    return hasattr(signal, "pthread_sigmask")


def current_mask() -> frozenset[int]:
    """Return the set of signals currently blocked in the calling thread."""
    # Blocking nothing is the documented way to query the mask.
    return frozenset(int(s) for s in signal.pthread_sigmask(signal.SIG_BLOCK, ()))


def pending_signals() -> frozenset[int]:
    """Return the set of signals raised while blocked and not yet delivered."""
    return frozenset(int(s) for s in signal.sigpending())


def swap_mask(signums: Iterable[int], *, replace: bool) -> set[signal.Signals | int]:
    # A single pthread_sigmask call installs the new mask and hands back the
    # old one, so there's no moment where the mask is half-updated.
    how = signal.SIG_SETMASK if replace else signal.SIG_BLOCK
    return signal.pthread_sigmask(how, signums)


def restore_mask(saved: Iterable[signal.Signals | int]) -> None:
    # Always SIG_SETMASK with the full snapshot. SIG_UNBLOCK-ing what we added
    # would also unblock signals that were already blocked when we started
    # (by an enclosing call, or by whoever owns the thread).
    signal.pthread_sigmask(signal.SIG_SETMASK, saved)
