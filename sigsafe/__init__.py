"""sigsafe - run a piece of code with some signals temporarily blocked
"""

# General layout:
#
# sigsafe/_signal_names.py turns signal names into platform signal numbers.
# sigsafe/_mask.py is the only place that talks to pthread_sigmask.
# sigsafe/_safe_exec.py puts the two together.
#
# This file pulls together the public API.
#
# Uses `from x import y as y` for compatibility with `pyright --verifytypes`

from ._version import __version__

from ._exceptions import SignalMaskUnavailableError as SignalMaskUnavailableError

from ._signal_names import (
    resolve_signal_names as resolve_signal_names,
    signal_name_table as signal_name_table,
)

from ._mask import (
    current_mask as current_mask,
    has_sigmask as has_sigmask,
    pending_signals as pending_signals,
)

from ._safe_exec import (
    MaskRequest as MaskRequest,
    safe_exec as safe_exec,
    safe_exec_capture as safe_exec_capture,
)

# Having the public path in .__module__ attributes is important for:
# - exception names in printed tracebacks
# - sphinx :show-inheritance:
# - pickle
from ._util import fixup_module_metadata

fixup_module_metadata(__name__, globals())
del fixup_module_metadata
