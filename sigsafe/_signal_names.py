from __future__ import annotations

import signal
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

# Signal names are spelled the way Perl's $Config{sig_name} and the shell's
# `kill -l` spell them: uppercase, without the "SIG" prefix. So "INT" and
# "TERM" resolve, while "SIGINT" or "int" are simply unknown names.
#
# Signal numbers that the platform supports but that have no symbolic name
# (on Linux, the real-time signals between RTMIN and RTMAX) are exposed as
# "NUM<n>", again following $Config{sig_name}.

_TABLE_LOCK = threading.Lock()
_TABLE: Mapping[str, int] | None = None


def _build_signal_name_table() -> Mapping[str, int]:
    table: dict[str, int] = {}
    # __members__ includes aliases (SIGIOT, SIGCLD, SIGPOLL on Linux), which
    # iterating over the enum itself would skip. On Windows it also holds
    # CTRL_C_EVENT and CTRL_BREAK_EVENT, which aren't signals at all.
    for name, member in signal.Signals.__members__.items():
        if name.startswith("SIG"):
            table[name[3:]] = int(member)
    for name in ("SIGRTMIN", "SIGRTMAX"):
        if hasattr(signal, name):
            table[name[3:]] = int(getattr(signal, name))

    named = set(table.values())
    for signum in sorted(int(s) for s in signal.valid_signals()):
        if signum not in named:
            table[f"NUM{signum}"] = signum

    # 0 is the "does this process exist" pseudo-signal, not something that
    # can live in a mask.
    return MappingProxyType({k: v for k, v in table.items() if v > 0})


def signal_name_table() -> Mapping[str, int]:
    """Return the read-only mapping from signal names to signal numbers for
    the running platform.

    The table is built on first use and then cached for the rest of the
    process's lifetime; every call returns the same object.

    """
    global _TABLE
    if _TABLE is None:
        with _TABLE_LOCK:
            if _TABLE is None:
                _TABLE = _build_signal_name_table()
    return _TABLE


def resolve_signal_names(names: Iterable[str | signal.Signals]) -> frozenset[int]:
    """Translate signal names into the set of signal numbers to put in a mask.

    Names that don't exist on this platform are dropped without complaint.
    :class:`signal.Signals` members are accepted too and resolve to their own
    value.

    ``"KILL"`` and ``"STOP"`` translate like any other name. The kernel
    refuses to block them and quietly leaves them out of the installed mask,
    without affecting the other signals in the set.

    Raises:
      TypeError: if an item is neither a :class:`str` nor a
          :class:`signal.Signals`.

    """
    table = signal_name_table()
    signums: set[int] = set()
    for name in names:
        if isinstance(name, signal.Signals):
            signums.add(int(name))
        elif isinstance(name, str):
            signum = table.get(name)
            if signum is not None:
                signums.add(signum)
        else:
            raise TypeError(
                f"signal names must be str or signal.Signals, not {type(name).__name__!r}"
            )
    return frozenset(signums)
