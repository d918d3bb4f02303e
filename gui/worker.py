"""Background worker for transform/recover sessions."""

from PySide6.QtCore import QObject, Signal

from engines.session import TransformSession, TransformCancelled


class TransformWorker(QObject):
    """Runs one session direction in a background thread.

    Move to a QThread and connect thread.started to run(). cancel() may be
    called from the GUI thread; the session polls it between passes.
    """

    finished = Signal(object)
    cancelled = Signal()
    error = Signal(str)
    progress = Signal(int)

    def __init__(self, session: TransformSession, direction: str = "transform"):
        super().__init__()
        if direction not in ("transform", "recover"):
            raise ValueError(f"direction must be 'transform' or 'recover', got {direction!r}")
        self.session = session
        self.direction = direction
        self._cancel_requested = False
        session.report_progress = self.progress.emit
        session.is_cancelled = self.is_cancel_requested

    def cancel(self):
        self._cancel_requested = True

    def is_cancel_requested(self) -> bool:
        return self._cancel_requested

    def run(self):
        self._cancel_requested = False
        try:
            if self.direction == "transform":
                results = self.session.transform()
            else:
                results = self.session.recover()
            self.finished.emit(results)
        except TransformCancelled:
            self.cancelled.emit()
        except Exception as e:
            self.error.emit(str(e))
