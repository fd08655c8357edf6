"""
Ripes - Moving pipes in the terminal

Draws pipes that wander across the terminal, turning at random and
wrapping around the screen edges, until interrupted.

Usage:
    ripes
    ripes --numpipes 5 --colorset 1
    ripes --min_len 2 --max_len 12 --delay 30

Stopping:
    Ctrl+C (SIGINT) or SIGTERM finish the current frame, restore the
    terminal and exit.
"""

import logging
import signal
import sys
import threading
import time
from typing import Callable, Optional

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from .config import (
    ConfigError,
    PipesConfig,
    DEFAULT_PALETTE,
    DEFAULT_GLYPH_SET,
    DEFAULT_MIN_TRACK_LEN,
    DEFAULT_MAX_TRACK_LEN,
    DEFAULT_NUM_PIPES,
    DEFAULT_DELAY_MS,
)
from .field import PipeField
from .surface import CursesSurface, RenderSurface

logger = logging.getLogger(__name__)

STOP_SIGNALS = ('SIGINT', 'SIGTERM')


def run_frames(field: PipeField, surface: RenderSurface, stop_event: threading.Event,
               delay: float = 0.0, max_frames: Optional[int] = None,
               clock: Callable[[], float] = time.monotonic) -> int:
    """
    Drive ``field`` on ``surface`` until ``stop_event`` is set.

    Each frame advances and draws every pipe, then presents the surface.
    The stop flag is checked between frames only. When the frame finished
    early, the rest of ``delay`` (seconds) is spent waiting on the stop
    flag, so a stop request cuts the wait short. The surface is torn down
    however the loop ends.

    Returns:
        Number of frames drawn
    """
    frames = 0
    try:
        while not stop_event.is_set():
            if max_frames is not None and frames >= max_frames:
                break
            started = clock()
            field.step_and_render(surface)
            surface.present()
            frames += 1

            remaining = delay - (clock() - started)
            if remaining > 0:
                stop_event.wait(remaining)
    except KeyboardInterrupt:
        stop_event.set()
    finally:
        surface.teardown()
    logger.debug(f"Stopped after {frames} frame(s)")
    return frames


class PipesApp:
    """
    Terminal driver for a pipe field.

    Owns the stop flag, the signal handlers that set it, and the curses
    session the pipes are drawn in.
    """

    def __init__(self, config: PipesConfig, stop_event: Optional[threading.Event] = None,
                 max_frames: Optional[int] = None):
        self.config = config.validate()
        self.stop_event = stop_event or threading.Event()
        self.max_frames = max_frames
        self.field: Optional[PipeField] = None
        self.frames_drawn = 0
        self._previous_handlers = {}

    def stop(self):
        """Ask the frame loop to finish after the current frame."""
        self.stop_event.set()

    def run(self):
        """Run the animation until stopped."""
        if not CURSES_AVAILABLE:
            if sys.platform == 'win32':
                print("Error: curses library not available on Windows.")
                print("")
                print("Try: pip install windows-curses")
            else:
                print("Error: curses library not available.")
            sys.exit(1)

        self._install_signal_handlers()
        try:
            curses.wrapper(self._main_loop)
        finally:
            self._restore_signal_handlers()

    def _main_loop(self, screen):
        """Main curses loop."""
        surface = CursesSurface(screen)
        try:
            self.field = PipeField.from_surface(surface, self.config)
        except ConfigError:
            surface.teardown()
            raise
        logger.info(f"Running {len(self.field)} pipe(s) on "
                    f"{self.field.width}x{self.field.height} terminal")
        self.frames_drawn = run_frames(self.field, surface, self.stop_event,
                                       delay=self.config.delay_seconds,
                                       max_frames=self.max_frames)

    def _install_signal_handlers(self):
        # Signal handlers may only be installed from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for name in STOP_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is None:
                continue
            self._previous_handlers[signum] = signal.signal(signum, lambda *_: self.stop())

    def _restore_signal_handlers(self):
        for signum, handler in self._previous_handlers.items():
            # None means the previous handler was not installed from Python
            if handler is not None:
                signal.signal(signum, handler)
        self._previous_handlers.clear()


def run_pipes(config: Optional[PipesConfig] = None, max_frames: Optional[int] = None) -> int:
    """
    Run the pipes animation in the current terminal.

    Args:
        config: Settings for the run (defaults when omitted)
        max_frames: Stop after this many frames instead of waiting for a signal

    Returns:
        Number of frames drawn
    """
    app = PipesApp(config or PipesConfig(), max_frames=max_frames)
    app.run()
    return app.frames_drawn


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="ripes",
        description="Prints moving pipes in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    ripes                       # One pipe, default colors
    ripes -n 4 -s 1             # Four pipes using color set 1
    ripes -m 2 -M 20 -d 5       # Long, fast tracks
    ripes --frames 500          # Stop by itself after 500 frames
        """
    )
    parser.add_argument("-s", "--colorset", type=int, default=DEFAULT_PALETTE,
                        help="Sets the color set to be used (0-2, default: 0)")
    parser.add_argument("-c", "--charset", type=int, default=DEFAULT_GLYPH_SET,
                        help="Sets the character set to be used (default: 0)")
    parser.add_argument("-M", "--max_len", type=int, default=DEFAULT_MAX_TRACK_LEN,
                        help="The maximum length a pipe will be before it turns (default: 7)")
    parser.add_argument("-m", "--min_len", type=int, default=DEFAULT_MIN_TRACK_LEN,
                        help="The minimum length of a pipe before it turns (default: 4)")
    parser.add_argument("-n", "--numpipes", type=int, default=DEFAULT_NUM_PIPES,
                        help="The number of pipes to be drawn at the same time (default: 1)")
    parser.add_argument("-d", "--delay", type=int, default=DEFAULT_DELAY_MS,
                        help="The delay between updates in ms (default: 16)")
    parser.add_argument("--seed", type=int,
                        help="Seed for repeatable pipe walks")
    parser.add_argument("--frames", type=int,
                        help="Stop after this many frames")
    parser.add_argument("--log-file", type=str,
                        help="Write log output to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug output (with --log-file)")
    return parser


def main(argv=None):
    """CLI entry point for the ripes command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # The terminal belongs to curses while running, so logs only go to a file
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG if args.verbose else logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    try:
        config = PipesConfig.from_args(args)
    except ConfigError as e:
        parser.error(str(e))

    if args.frames is not None and args.frames < 0:
        parser.error(f"--frames must not be negative, got {args.frames}")

    run_pipes(config, max_frames=args.frames)
    print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
