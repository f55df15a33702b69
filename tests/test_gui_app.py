import pytest

pytest.importorskip("tkinter")

from crew_roster.gui_app import App  # noqa: E402


class _RefreshHarness:
    def __init__(self, error):
        self.error = error
        self.scheduled = 0

    def _on_refresh(self, quiet: bool = False):
        raise self.error

    def _schedule_refresh(self):
        self.scheduled += 1


def test_auto_refresh_reschedules_after_a_failure() -> None:
    app = _RefreshHarness(RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        App._auto_refresh(app)
    assert app.scheduled == 1
