"""Refresh triggers for the pending change repository.

Three triggers keep the repository fresh: an initial refresh on start, a
fixed polling interval, and save notifications from the editor surface.
Triggers are independent and not debounced; the repository tolerates
overlapping refreshes.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Self

from tfview.core.pending.repository import PendingChangeRepository
from tfview.domain.exceptions import ToolProcessError
from tfview.ports.tool import WorkspaceTool

logger = logging.getLogger(__name__)


class StatusPoller:
    """Drives PendingChangeRepository.refresh from timers and save events.

    Example:
        with StatusPoller(repository, interval=2.0) as poller:
            ...
            poller.notify_saved("C:/Dev/Project/src/app.ts")
    """

    def __init__(
        self,
        repository: PendingChangeRepository,
        interval: float,
        workspace_tool: WorkspaceTool | None = None,
        auto_checkout_on_save: bool = False,
        wait: Callable[[float], bool] | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            repository: Repository to refresh.
            interval: Seconds between polls.
            workspace_tool: Adapter used to check out saved files.
            auto_checkout_on_save: Check out a saved file before refreshing.
            wait: Sleeps for the given seconds and returns True when polling
                should stop. Defaults to waiting on the poller's stop event.
        """
        if auto_checkout_on_save and workspace_tool is None:
            raise ValueError("auto_checkout_on_save requires a workspace_tool")
        self._repository = repository
        self._interval = interval
        self._workspace_tool = workspace_tool
        self._auto_checkout_on_save = auto_checkout_on_save
        self._stop = threading.Event()
        self._wait = wait or self._stop.wait
        self._thread: threading.Thread | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start polling on a background thread. Refreshes immediately."""
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="tfview-poll", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop polling and wait for in-flight refreshes to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def tick(self) -> None:
        """Run one poll: refresh the repository, logging unexpected errors."""
        try:
            self._repository.refresh()
        except Exception:
            logger.exception("Pending change refresh failed")

    def _run(self) -> None:
        self.tick()
        while not self._wait(self._interval):
            if self._stop.is_set():
                break
            self.tick()

    def notify_saved(self, path: str) -> Future[None]:
        """Handle a save observed by the editor surface.

        Optionally checks the file out, then refreshes immediately on a
        worker thread.

        Args:
            path: Local path of the saved file.

        Returns:
            Future completing when the refresh has run.
        """
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="tfview-save")
            return self._executor.submit(self._handle_save, path)

    def _handle_save(self, path: str) -> None:
        if self._auto_checkout_on_save and self._workspace_tool is not None:
            try:
                result = self._workspace_tool.checkout(path)
            except ToolProcessError as e:
                logger.warning("Checkout of %s failed: %s", path, e.message)
            else:
                if not result.success:
                    logger.warning("Checkout of %s failed: %s", path, result.message)
        self.tick()

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> bool:
        self.stop()
        return False
