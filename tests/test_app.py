"""
Tests for the frame loop, the terminal driver and the CLI entry point.

These never open a real terminal: the frame loop runs against
BufferSurface and curses is patched out where the driver touches it.
"""

import os
import signal
import sys
import threading
from unittest.mock import MagicMock, patch

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ripes import app as app_module
from ripes.app import PipesApp, main, run_frames
from ripes.config import ConfigError, PipesConfig
from ripes.field import PipeField
from ripes.surface import BufferSurface


def make_field(rows=8, cols=12, num_pipes=2):
    return PipeField(cols, rows, num_pipes=num_pipes, seed=1)


# ===========================================================================
# Frame Loop Tests
# ===========================================================================

class TestRunFrames:
    def test_runs_requested_frames(self):
        surface = BufferSurface(8, 12)
        frames = run_frames(make_field(), surface, threading.Event(), max_frames=5)
        assert frames == 5
        assert surface.frames_presented == 5
        assert surface.torn_down is True

    def test_stop_before_first_frame(self):
        surface = BufferSurface(8, 12)
        stop = threading.Event()
        stop.set()
        frames = run_frames(make_field(), surface, stop)
        assert frames == 0
        assert surface.frames_presented == 0
        assert surface.torn_down is True

    def test_stop_checked_between_frames(self):
        surface = BufferSurface(8, 12)
        stop = threading.Event()
        field = make_field()
        original = field.step_and_render
        calls = []

        def step_and_stop(target):
            original(target)
            calls.append(1)
            if len(calls) == 3:
                stop.set()

        field.step_and_render = step_and_stop
        frames = run_frames(field, surface, stop)
        assert frames == 3
        assert surface.frames_presented == 3

    def test_teardown_after_error(self):
        surface = BufferSurface(8, 12)
        surface.present = MagicMock(side_effect=RuntimeError("display lost"))
        with pytest.raises(RuntimeError):
            run_frames(make_field(), surface, threading.Event())
        assert surface.torn_down is True

    def test_keyboard_interrupt_stops_cleanly(self):
        surface = BufferSurface(8, 12)
        surface.present = MagicMock(side_effect=[None, KeyboardInterrupt])
        stop = threading.Event()
        frames = run_frames(make_field(), surface, stop)
        assert frames == 1
        assert stop.is_set()
        assert surface.torn_down is True

    def test_waits_rest_of_frame(self):
        surface = BufferSurface(8, 12)
        stop = MagicMock()
        stop.is_set.return_value = False
        clock = MagicMock(side_effect=[0.0, 0.004])
        run_frames(make_field(), surface, stop, delay=0.016, max_frames=1, clock=clock)
        stop.wait.assert_called_once()
        assert stop.wait.call_args[0][0] == pytest.approx(0.012)

    def test_no_wait_when_frame_overran(self):
        surface = BufferSurface(8, 12)
        stop = MagicMock()
        stop.is_set.return_value = False
        clock = MagicMock(side_effect=[0.0, 0.050])
        run_frames(make_field(), surface, stop, delay=0.016, max_frames=1, clock=clock)
        stop.wait.assert_not_called()

    def test_stop_from_other_thread(self):
        surface = BufferSurface(8, 12)
        stop = threading.Event()
        timer = threading.Timer(0.05, stop.set)
        timer.start()
        try:
            frames = run_frames(make_field(), surface, stop, delay=0.005)
        finally:
            timer.cancel()
        assert frames > 0
        assert surface.torn_down is True


# ===========================================================================
# PipesApp Tests
# ===========================================================================

class TestPipesApp:
    def test_rejects_invalid_config(self):
        with pytest.raises(ConfigError):
            PipesApp(PipesConfig(num_pipes=0))

    def test_stop_sets_flag(self):
        stop = threading.Event()
        app = PipesApp(PipesConfig(), stop_event=stop)
        app.stop()
        assert stop.is_set()

    def test_main_loop_sizes_field_to_surface(self):
        surface = BufferSurface(6, 20)
        app = PipesApp(PipesConfig(num_pipes=3, delay_ms=0, seed=2), max_frames=4)
        with patch.object(app_module, "CursesSurface", return_value=surface):
            app._main_loop(screen=MagicMock())
        assert app.frames_drawn == 4
        assert len(app.field) == 3
        assert (app.field.width, app.field.height) == (20, 6)
        assert surface.torn_down is True

    @pytest.mark.skipif(sys.platform == 'win32', reason="SIGINT handler semantics differ on Windows")
    def test_signal_handler_sets_stop_flag(self):
        app = PipesApp(PipesConfig())
        previous = signal.getsignal(signal.SIGINT)
        app._install_signal_handlers()
        try:
            handler = signal.getsignal(signal.SIGINT)
            handler(signal.SIGINT, None)
            assert app.stop_event.is_set()
        finally:
            app._restore_signal_handlers()
        assert signal.getsignal(signal.SIGINT) == previous

    def test_run_wraps_curses_and_restores_handlers(self):
        app = PipesApp(PipesConfig())
        with patch.object(app_module, "curses") as mock_curses, \
                patch.object(app, "_install_signal_handlers") as install, \
                patch.object(app, "_restore_signal_handlers") as restore:
            app.run()
        mock_curses.wrapper.assert_called_once_with(app._main_loop)
        install.assert_called_once()
        restore.assert_called_once()

    def test_run_without_curses_exits(self, capsys):
        app = PipesApp(PipesConfig())
        with patch.object(app_module, "CURSES_AVAILABLE", False):
            with pytest.raises(SystemExit) as exc:
                app.run()
        assert exc.value.code == 1
        assert "curses library not available" in capsys.readouterr().out


# ===========================================================================
# CLI Tests
# ===========================================================================

class TestMain:
    def test_runs_with_parsed_config(self, capsys):
        with patch.object(app_module, "run_pipes") as run:
            assert main(["-n", "3", "-s", "1", "--seed", "5", "--frames", "10"]) == 0
        config = run.call_args[0][0]
        assert config.num_pipes == 3
        assert config.palette == 1
        assert config.seed == 5
        assert run.call_args[1]["max_frames"] == 10
        assert "Goodbye!" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "argv",
        [["-m", "7", "-M", "4"], ["-s", "3"], ["-c", "1"], ["-n", "0"], ["--frames", "-1"]],
        ids=["min-not-below-max", "colorset", "charset", "no-pipes", "negative-frames"],
    )
    def test_rejects_bad_settings(self, argv):
        with patch.object(app_module, "run_pipes") as run:
            with pytest.raises(SystemExit) as exc:
                main(argv)
        assert exc.value.code == 2
        run.assert_not_called()

    def test_non_integer_rejected(self):
        with pytest.raises(SystemExit) as exc:
            main(["-n", "many"])
        assert exc.value.code == 2

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "ripes.log"
        with patch.object(app_module, "run_pipes"), \
                patch.object(app_module.logging, "basicConfig") as basic_config:
            main(["--log-file", str(log_file), "-v"])
        kwargs = basic_config.call_args[1]
        assert kwargs["filename"] == str(log_file)
        assert kwargs["level"] == app_module.logging.DEBUG
