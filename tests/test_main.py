"""
Tests for the scripted replay entry point.
"""

from touchmath.core.config import EngineConfig
from touchmath.core.engine import CursorUpdateKind, TouchpadEngine
from touchmath.main import main, run_session


class TestMain:
    """Tests for the replay session."""

    def test_run_session_emits_updates(self):
        """Test that the replay produces a swipe and a recentering."""
        updates = run_session(TouchpadEngine(EngineConfig()), ticks=30)
        kinds = {u.kind for u in updates}

        assert CursorUpdateKind.HOLD_STARTED in kinds
        assert CursorUpdateKind.SWIPED in kinds
        assert CursorUpdateKind.RESET in kinds

    def test_main_returns_zero(self):
        """Test the entry point exit code."""
        assert main(EngineConfig(log_level="INFO")) == 0

    def test_main_writes_log_file(self, tmp_path):
        """Test that the configured log file receives the replay log."""
        log_file = tmp_path / "replay.log"

        assert main(EngineConfig(log_level="INFO", log_file=str(log_file))) == 0
        assert "Replay finished" in log_file.read_text(encoding="utf-8")
