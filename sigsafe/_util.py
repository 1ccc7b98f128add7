# Little utilities we use internally
from __future__ import annotations

import signal
import threading
from typing import Any


# Used by the test suite to generate synthetic signals.
#
# Equivalent to the C function raise(), which Python doesn't wrap. Unlike
# os.kill(os.getpid(), ...) this targets the calling thread, which is the
# thread whose mask we manipulate; a process-directed signal can be picked
# up by any thread that doesn't have it blocked.
def signal_raise(signum: int) -> None:
    signal.pthread_kill(threading.get_ident(), signum)


def fixup_module_metadata(module_name: str, namespace: dict[str, Any]) -> None:
    seen_ids: set[int] = set()

    def fix_one(qualname: str, name: str, obj: object) -> None:
        # avoid infinite recursion
        if id(obj) in seen_ids:
            return
        seen_ids.add(id(obj))

        mod = getattr(obj, "__module__", None)
        if mod is not None and mod.startswith("sigsafe."):
            obj.__module__ = module_name
            # Modules, unlike everything else in Python, put fully-qualified
            # names into their __name__ attribute. We check for "." to avoid
            # rewriting these.
            if hasattr(obj, "__name__") and "." not in obj.__name__:
                obj.__name__ = name
                if hasattr(obj, "__qualname__"):
                    obj.__qualname__ = qualname
            if isinstance(obj, type):
                for attr_name, attr_value in obj.__dict__.items():
                    fix_one(qualname + "." + attr_name, attr_name, attr_value)

    for objname, obj in namespace.items():
        if not objname.startswith("_"):  # ignore private attributes
            fix_one(objname, objname, obj)
