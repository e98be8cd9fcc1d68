"""
Upload progress monitor.

Polls a progress URL on a cancellable asyncio task and turns each
snapshot into progress, complete and error callbacks.
"""
import asyncio
from dataclasses import replace
from typing import Optional

from .models import MonitorOptions, MonitorState, ProgressSnapshot
from .protocols import ProgressSource, LoggerProtocol
from ..logging import get_logger


class ProgressMonitor:
    """
    Watches one upload's processing progress.

    Lifecycle:
        IDLE --start()--> ACTIVE --stop() / completion / fetch failure--> IDLE

    Each monitor owns exactly one polling task. Server-reported error
    codes are skipped and polling continues; a failed fetch ends the
    session and is reported through ``on_error``.

    Example:
        >>> monitor = ProgressMonitor(dest.progress_url, client)
        >>> monitor.start(on_progress=print, on_complete=lambda: print("done"))
        >>> await monitor.wait()
    """

    def __init__(
        self,
        progress_url: str,
        source: ProgressSource,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize progress monitor.

        Args:
            progress_url: Status address to poll
            source: Object providing ``fetch_progress`` (e.g. AsyncUploadClient)
            logger: Optional logger instance
        """
        self._progress_url = progress_url
        self._source = source
        self._logger = logger or get_logger('kollupy.monitor')

        self._task: Optional[asyncio.Task] = None
        self._options: Optional[MonitorOptions] = None
        # Bumped on every start/stop; a tick only dispatches while its
        # captured generation is still current.
        self._generation = 0
        self._idle: Optional[asyncio.Event] = None

    @property
    def progress_url(self) -> str:
        """Returns the polled status address."""
        return self._progress_url

    @property
    def state(self) -> MonitorState:
        """Returns the current lifecycle state."""
        return MonitorState.ACTIVE if self._task is not None else MonitorState.IDLE

    @property
    def is_active(self) -> bool:
        """True while a polling task is installed."""
        return self._task is not None

    def start(self, options: Optional[MonitorOptions] = None, **overrides) -> None:
        """
        Start polling.

        Must be called with a running event loop. Starting an active
        monitor replaces its polling task.

        Args:
            options: Callbacks and interval
            **overrides: Individual MonitorOptions fields
                (on_progress, on_complete, on_error, interval)

        Raises:
            ConfigurationError: If the interval is not positive
        """
        options = replace(options, **overrides) if options else MonitorOptions(**overrides)
        loop = asyncio.get_running_loop()

        self._cancel_task()
        self._generation += 1
        generation = self._generation

        if self._idle is None or self._idle.is_set():
            self._idle = asyncio.Event()

        self._options = options
        self._task = loop.create_task(self._run(generation, options))
        self._logger.debug(f"Monitoring {self._progress_url} every {options.interval}s")

    def stop(self) -> None:
        """
        Stop polling.

        Idempotent; safe before start(). No callback fires after this
        returns, even for a fetch already in flight.
        """
        self._generation += 1
        was_active = self._cancel_task()
        self._options = None

        if self._idle is not None:
            self._idle.set()

        if was_active:
            self._logger.debug(f"Stopped monitoring {self._progress_url}")

    async def wait(self) -> None:
        """Wait until the monitor returns to IDLE."""
        if self._task is None or self._idle is None:
            return
        await self._idle.wait()

    def _cancel_task(self) -> bool:
        task, self._task = self._task, None
        if task is None:
            return False

        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None

        # The polling task stops itself on completion/error; it simply
        # returns instead of being cancelled.
        if task is not current and not task.done():
            task.cancel()
        return True

    def _is_live(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(self, generation: int, options: MonitorOptions) -> None:
        try:
            while self._is_live(generation):
                await asyncio.sleep(options.interval)
                if not self._is_live(generation):
                    return
                await self._tick(generation, options)
        except Exception as e:
            self._logger.exception(f"Progress callback failed for {self._progress_url}: {e}")
            if self._is_live(generation):
                self.stop()

    async def _tick(self, generation: int, options: MonitorOptions) -> None:
        try:
            snapshot: ProgressSnapshot = await self._source.fetch_progress(self._progress_url)
        except Exception as e:
            if not self._is_live(generation):
                return
            self._logger.warning(f"Progress fetch failed for {self._progress_url}: {e}")
            self.stop()
            options.on_error(e)
            return

        if not self._is_live(generation):
            return

        if not snapshot.has_result:
            self._logger.debug(
                f"Ignoring progress snapshot with error {snapshot.error} for {self._progress_url}"
            )
            return

        options.on_progress(snapshot.progress)

        if snapshot.progress >= 100 and self._is_live(generation):
            self.stop()
            self._logger.info(f"Processing complete for {self._progress_url}")
            options.on_complete()
