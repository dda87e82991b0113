import asyncio
import io

from liftsim.controller.main import cbreak, read_keys, watch_keyboard


def test_read_keys_quits_on_single_q():
    stream = io.StringIO("xyqz")
    calls = []

    read_keys(stream, lambda: calls.append("quit"))

    assert calls == ["quit"]
    # nothing after the q is consumed
    assert stream.read() == "z"


def test_read_keys_accepts_upper_case():
    calls = []
    read_keys(io.StringIO("Q"), lambda: calls.append("quit"))
    assert calls == ["quit"]


def test_read_keys_stops_at_end_of_input():
    calls = []
    read_keys(io.StringIO("abc\n"), lambda: calls.append("quit"))
    assert calls == []


def test_cbreak_leaves_non_terminal_untouched():
    stream = io.StringIO("q")
    with cbreak(stream):
        assert stream.read() == "q"


async def test_watch_keyboard_sets_shutdown_event():
    shutdown_event = asyncio.Event()

    watch_keyboard(shutdown_event, io.StringIO("aq"))

    await asyncio.wait_for(shutdown_event.wait(), timeout=1)
    assert shutdown_event.is_set()
