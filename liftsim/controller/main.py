#!/usr/bin/env python3
"""
Elevator Simulation Entry Point

Runs the simulation loop together with the random request source and
prints one status line per elevator per tick. Press ``q``, or send
SIGINT/SIGTERM, to stop.
"""

import asyncio
import signal
import sys
import threading
from contextlib import asynccontextmanager, contextmanager
from typing import Callable, Optional, TextIO

import structlog

from liftsim.config import configure_logging, load_settings
from liftsim.exceptions import ConfigurationError

from .factory import create_controller

logger = structlog.get_logger(__name__)


def handle_signals(shutdown_event: asyncio.Event) -> None:
    """Set up signal handlers for graceful shutdown."""
    loop = asyncio.get_running_loop()

    def handle_exit(sig):
        logger.info("exit_signal_received", signal=sig.name)
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_exit, sig)
        except NotImplementedError:
            # Windows event loops do not support signal handlers
            pass


def read_keys(stream: TextIO, on_quit: Callable[[], None]) -> None:
    """Read ``stream`` one character at a time and call ``on_quit`` on ``q``.

    Other keys are ignored. Returns after ``q`` or at end of input.
    """
    while True:
        key = stream.read(1)
        if not key:
            return
        if key.lower() == "q":
            on_quit()
            return


@contextmanager
def cbreak(stream: TextIO):
    """Deliver keypresses as they are typed, without waiting for Enter.

    Only applies to a POSIX terminal; the terminal settings are restored on
    exit. Anything else is left untouched.
    """
    if sys.platform == "win32" or not stream.isatty():
        yield
        return

    import termios
    import tty

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def watch_keyboard(shutdown_event: asyncio.Event, stream: Optional[TextIO] = None) -> None:
    """Set ``shutdown_event`` when ``q`` is pressed on ``stream`` (stdin by default)."""
    loop = asyncio.get_running_loop()
    if stream is None:
        stream = sys.stdin
    threading.Thread(
        target=read_keys,
        args=(stream, lambda: loop.call_soon_threadsafe(shutdown_event.set)),
        name="keyboard",
        daemon=True,
    ).start()


@asynccontextmanager
async def simulation_lifecycle(settings):
    """Context manager for the simulation lifecycle.

    Yields:
        ElevatorController: The initialized controller, with its request
        source running
    """
    controller = None
    try:
        logger.info("simulation_starting")
        controller = await create_controller(settings, reporter=print)
        if controller.request_source is not None:
            controller.request_source.start()
        yield controller
    except Exception as e:
        logger.error("simulation_error", error=str(e))
        raise
    finally:
        if controller:
            if controller.request_source is not None:
                await controller.request_source.stop()
            await controller.request_stream.close()
        logger.info("simulation_shutdown_complete")


async def main() -> int:
    """Main entry point for the simulation."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("configuration_error", error=str(e))
        return 1

    shutdown_event = asyncio.Event()
    handle_signals(shutdown_event)

    async with simulation_lifecycle(settings) as controller:
        print("Press 'q' to stop the system.")
        with cbreak(sys.stdin):
            watch_keyboard(shutdown_event)
            await controller.run(shutdown_event)
    return 0


def run() -> None:
    configure_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
