import signal
import sys

import pytest

from .._signal_names import resolve_signal_names, signal_name_table

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")


def test_table_basics():
    table = signal_name_table()
    assert table["INT"] == signal.SIGINT
    assert table["TERM"] == signal.SIGTERM
    assert table["KILL"] == signal.SIGKILL
    for name, signum in table.items():
        assert not name.startswith("SIG")
        assert name == name.upper()
        assert signum > 0


def test_table_is_built_once_and_read_only():
    table = signal_name_table()
    assert signal_name_table() is table
    with pytest.raises(TypeError):
        table["INT"] = 99  # type: ignore[index]


@pytest.mark.skipif(not hasattr(signal, "SIGIOT"), reason="no SIGIOT alias")
def test_table_includes_aliases():
    assert signal_name_table()["IOT"] == signal.SIGABRT


def test_table_covers_every_valid_signal():
    values = set(signal_name_table().values())
    for signum in signal.valid_signals():
        assert int(signum) in values


@pytest.mark.skipif(not hasattr(signal, "SIGRTMIN"), reason="no real-time signals")
def test_unnamed_realtime_signals_get_num_names():
    table = signal_name_table()
    assert table["RTMIN"] == signal.SIGRTMIN
    assert table["RTMAX"] == signal.SIGRTMAX
    between = int(signal.SIGRTMIN) + 1
    if between < signal.SIGRTMAX:
        assert table[f"NUM{between}"] == between


def test_resolve():
    assert resolve_signal_names(["INT", "TERM"]) == {signal.SIGINT, signal.SIGTERM}
    assert resolve_signal_names([]) == frozenset()
    # Duplicates collapse
    assert resolve_signal_names(("INT", "INT")) == {signal.SIGINT}


def test_resolve_ignores_unknown_names():
    assert resolve_signal_names(["NOT_A_SIGNAL", "INT", "", "SIGTERM", "term"]) == {
        signal.SIGINT
    }


def test_resolve_accepts_signals_members():
    assert resolve_signal_names([signal.SIGTERM, "INT"]) == {
        signal.SIGINT,
        signal.SIGTERM,
    }


def test_resolve_translates_unblockable_signals():
    assert resolve_signal_names(["KILL", "STOP", "INT"]) == {
        signal.SIGKILL,
        signal.SIGSTOP,
        signal.SIGINT,
    }


def test_resolve_rejects_non_names():
    with pytest.raises(TypeError):
        resolve_signal_names(["INT", 2])  # type: ignore[list-item]


def test_table_skips_non_signal_members(monkeypatch):
    import enum

    from .. import _signal_names

    # Windows' signal.Signals carries console events next to the signals
    fake_signals = enum.IntEnum(
        "Signals", {"SIGINT": 2, "SIGTERM": 15, "CTRL_C_EVENT": 0, "CTRL_BREAK_EVENT": 1}
    )
    monkeypatch.setattr(_signal_names.signal, "Signals", fake_signals)
    table = _signal_names._build_signal_name_table()
    assert table["INT"] == 2
    assert table["TERM"] == 15
    assert not any(name.startswith("CTRL") or name.endswith("EVENT") for name in table)
