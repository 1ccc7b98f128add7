from __future__ import annotations

import logging
import signal
from typing import TYPE_CHECKING, Any, TypeVar

import attrs
import outcome

from ._exceptions import SignalMaskUnavailableError
from ._mask import has_sigmask, restore_mask, swap_mask
from ._signal_names import resolve_signal_names, signal_name_table

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from typing_extensions import TypeAlias

LOGGER = logging.getLogger("sigsafe.safe_exec")

T = TypeVar("T")

SignalName: TypeAlias = "str | signal.Signals"


def _sequence_or_empty(value: object) -> object:
    # None means "nothing"; lists are frozen into tuples. Anything else is
    # passed through untouched so the validator can reject it.
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(value)
    return value


@attrs.frozen(kw_only=True)
class MaskRequest:
    """The validated options of one :func:`safe_exec` call.

    Constructing it checks every precondition, so a malformed call fails
    with :exc:`TypeError` before any signal mask has been touched.

    """

    code: Callable[..., Any] = attrs.field(validator=attrs.validators.is_callable())
    args: tuple[Any, ...] = attrs.field(
        default=(),
        converter=_sequence_or_empty,
        validator=attrs.validators.instance_of(tuple),
    )
    sigset: tuple[SignalName, ...] = attrs.field(
        default=(),
        converter=_sequence_or_empty,
        validator=attrs.validators.deep_iterable(
            member_validator=attrs.validators.instance_of((str, signal.Signals)),
            iterable_validator=attrs.validators.instance_of(tuple),
        ),
    )
    replace_mask: bool = attrs.field(default=False, converter=bool)

    def signums(self) -> frozenset[int]:
        """Resolve :attr:`sigset` against this platform's signal names."""
        return resolve_signal_names(self.sigset)


def _log_unknown_names(sigset: Sequence[SignalName]) -> None:
    table = signal_name_table()
    unknown = [
        name for name in sigset if isinstance(name, str) and name not in table
    ]
    if unknown:
        LOGGER.debug("ignoring unknown signal names %r", unknown)


def run_masked(request: MaskRequest) -> outcome.Outcome[Any]:
    """Run ``request.code(*request.args)`` with the request's signals masked.

    This is the engine behind :func:`safe_exec` and
    :func:`safe_exec_capture`. The calling thread's mask is restored before
    this returns, whatever the callable did; the callable's result or
    exception comes back as an :class:`outcome.Outcome`.

    """
    if not has_sigmask():
        raise SignalMaskUnavailableError(
            "this platform has no per-thread signal mask (signal.pthread_sigmask)"
        )

    signums = request.signums()
    if LOGGER.isEnabledFor(logging.DEBUG):
        _log_unknown_names(request.sigset)
        LOGGER.debug(
            "%s signal mask with %s",
            "replacing" if request.replace_mask else "extending",
            sorted(signums),
        )

    # If this raises, nothing was installed and there's nothing to undo.
    saved = swap_mask(signums, replace=request.replace_mask)

    # outcome.capture catches BaseException, so KeyboardInterrupt,
    # SystemExit and friends also wait until the mask is back.
    result = outcome.capture(request.code, *request.args)

    try:
        restore_mask(saved)
    except BaseException as exc:
        # The mask is already back: pthread_sigmask raises only when a handler
        # for a signal it just unblocked raises. Keep the callable's error
        # reachable from the handler's.
        if isinstance(result, outcome.Error):
            _chain_error(exc, result.error)
        raise
    LOGGER.debug("restored signal mask %s", sorted(int(s) for s in saved))
    return result


def _chain_error(exc: BaseException, error: BaseException) -> None:
    # Graft `error` onto the end of exc's context chain
    root = exc
    while True:
        if root is error:
            return
        if root.__cause__ is not None:
            root = root.__cause__
        elif root.__suppress_context__:
            # The user cut off context here (e.g. with "raise from None"), so
            # we'll discard it and graft our context on in its place.
            root.__suppress_context__ = False
            break
        elif root.__context__ is not None:
            root = root.__context__
        else:
            break
    root.__context__ = error


def safe_exec_capture(
    *,
    code: Callable[..., T],
    args: Sequence[Any] | None = None,
    sigset: Sequence[SignalName] | None = None,
    replace_mask: bool = False,
) -> outcome.Outcome[T]:
    """Like :func:`safe_exec`, but return the callable's result or exception
    as an :class:`outcome.Value` or :class:`outcome.Error` instead of
    returning or raising it.

    Precondition errors (:exc:`TypeError`,
    :exc:`SignalMaskUnavailableError`) and failures to install the mask
    (:exc:`OSError`) are still raised directly, and so is an exception raised
    by a signal handler while the mask is being restored.

    """
    request = MaskRequest(code=code, args=args, sigset=sigset, replace_mask=replace_mask)
    return run_masked(request)


def safe_exec(
    *,
    code: Callable[..., T],
    args: Sequence[Any] | None = None,
    sigset: Sequence[SignalName] | None = None,
    replace_mask: bool = False,
) -> T:
    """Call ``code(*args)`` while the signals in ``sigset`` are blocked.

    Blocked signals aren't lost: if one arrives while ``code`` is running it
    stays pending, and is delivered as soon as the original mask is back in
    place. This makes it possible to run a piece of code that must not be
    interrupted half-way by, say, ``SIGINT`` or ``SIGTERM``.

    Once ``code`` finishes, the calling thread's signal mask is restored to
    exactly what it was before the call. This happens whether ``code``
    returned or raised. If it raised, the very same exception is re-raised
    after the mask has been restored.

    Signal masks are per-thread, so only the calling thread is affected.
    Calls nest: each call restores the mask it found on entry.

    Signals that were pending get delivered while the mask is being
    restored. If one of their handlers raises (``KeyboardInterrupt`` from a
    ``SIGINT`` that arrived during the call, say), that exception is what
    ``safe_exec`` raises; the mask is still restored. If ``code`` had raised
    as well, its exception is attached to the end of the handler
    exception's ``__context__`` chain, so it shows up in the traceback
    instead of being lost. If ``code`` returned, its value is discarded.

    Args:
      code: The callable to run. It is called exactly once.
      args: A list or tuple of positional arguments for ``code``.
      sigset: A list or tuple of signal names to block, spelled without the
          ``SIG`` prefix (``"INT"``, ``"TERM"``, ``"ALRM"``, ...), or
          :class:`signal.Signals` members. Names unknown on this platform
          are ignored. Any signal except ``KILL`` and ``STOP`` can be
          blocked; those two are silently left out by the kernel.
      replace_mask: If false (the default), the signals in ``sigset`` are
          added to the signals that are already blocked. If true, the mask
          is replaced by ``sigset`` for the duration of the call, so
          signals blocked by the caller but not listed in ``sigset`` can
          be delivered while ``code`` runs.

    Returns:
      Whatever ``code`` returns.

    Raises:
      TypeError: if ``code`` is not callable, or ``args`` or ``sigset`` is
          not a list or tuple, or ``sigset`` contains something other than
          strings and :class:`signal.Signals`. Nothing has been masked or
          run at that point.
      SignalMaskUnavailableError: if the platform has no
          :func:`signal.pthread_sigmask`.
      OSError: if the new mask can't be installed.

    Example:

      Keep ``SIGINT`` and ``SIGTERM`` from interrupting a file rewrite
      half-way::

         sigsafe.safe_exec(
             code=rewrite_state_file,
             args=[path, new_state],
             sigset=["INT", "TERM"],
         )

    """
    return safe_exec_capture(
        code=code, args=args, sigset=sigset, replace_mask=replace_mask
    ).unwrap()
