from __future__ import annotations


class SignalMaskUnavailableError(RuntimeError):
    """Raised by :func:`safe_exec` when the platform has no per-thread signal
    mask (there is no :func:`signal.pthread_sigmask`, e.g. on Windows).

    It is raised before anything else happens: the callable is not run and
    no mask is touched.

    """
