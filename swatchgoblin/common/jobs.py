from dataclasses import dataclass
import logging
from queue import Empty, Queue
import threading
import traceback


LOG = logging.getLogger(__name__)


@dataclass
class JobResult:
    ok: bool
    value: object = None
    error: Exception | None = None
    tb: str | None = None


class BackgroundJobRunner:
    """Runs one-off work on a thread and hands results back on the Tk loop."""

    def __init__(self, root, poll_ms=40):
        self.root = root
        self.poll_ms = poll_ms
        self._queue = Queue()
        self._polling = False

    def submit(self, func, on_done, *args, **kwargs):
        worker = threading.Thread(
            target=self._run_job,
            args=(func, on_done, args, kwargs),
            daemon=True,
        )
        worker.start()
        self._ensure_polling()
        return worker

    def _run_job(self, func, on_done, args, kwargs):
        try:
            result = JobResult(ok=True, value=func(*args, **kwargs))
        except Exception as exc:
            result = JobResult(ok=False, error=exc, tb=traceback.format_exc())
        self._queue.put((on_done, result))

    def _ensure_polling(self):
        if not self._polling:
            self._polling = True
            self.root.after(self.poll_ms, self._poll_once)

    def _poll_once(self):
        while True:
            try:
                callback, result = self._queue.get_nowait()
            except Empty:
                break
            try:
                callback(result)
            except Exception:
                LOG.exception('job callback failed')

        if self._polling:
            self.root.after(self.poll_ms, self._poll_once)
