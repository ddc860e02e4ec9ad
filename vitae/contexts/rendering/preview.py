"""
Debounced preview regeneration.

Edits arrive in bursts; regenerating the PDF after each keystroke is wasted
work. PreviewScheduler collapses a burst into one regeneration: every request
cancels the pending one and schedules a new run after a fixed delay. Only the
most recent request fires.

Runs never overlap (they are serialized by a lock) and every finished run
replaces the shared PreviewArtifact, so the last completed run wins.
"""

import os
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from dotenv import load_dotenv

from vitae.contexts.rendering.logger import _log_debug, _log_error, log_preview_committed
from vitae.utils.timestamp import now_exact

load_dotenv()

PREVIEW_DELAY_S = float(os.getenv("VITAE_PREVIEW_DELAY_S", "1.0"))


@dataclass(frozen=True)
class PreviewArtifact:
    """
    Most recently generated preview.

    Attributes:
        data: PDF bytes (None before the first run)
        generation: Request number that produced the data
        committed_at: ISO timestamp of the commit
    """

    data: Optional[bytes] = None
    generation: int = 0
    committed_at: Optional[str] = None


class PreviewScheduler:
    """
    Schedules preview regeneration with debouncing.

    Args:
        generate: Produces the preview bytes from the current document, or
            None to keep the current artifact
        delay: Debounce window in seconds
        on_commit: Called with each committed PreviewArtifact
        timer_factory: threading.Timer compatible factory

    Example:
        >>> scheduler = PreviewScheduler(lambda: render_resume_bytes(editor.resume))
        >>> editor.scheduler = scheduler
        >>> editor.update_field("name", "Jane Doe")   # schedules a run in 1s
        >>> scheduler.request_update(immediate=True)   # runs now, cancels the pending one
    """

    def __init__(
        self,
        generate: Callable[[], Optional[bytes]],
        delay: float = PREVIEW_DELAY_S,
        on_commit: Optional[Callable[[PreviewArtifact], None]] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._generate = generate
        self.delay = delay
        self.on_commit = on_commit
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._run_lock = threading.Lock()
        self._timer = None
        self._generation = 0
        self.artifact = PreviewArtifact()

    @property
    def pending(self) -> bool:
        """True while a scheduled run has not fired yet."""
        return self._timer is not None

    def request_update(self, immediate: bool = False) -> Optional[PreviewArtifact]:
        """
        Request a preview regeneration.

        Args:
            immediate: Run now (synchronously) instead of after the delay

        Returns:
            The committed artifact when immediate, otherwise None
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._cancel_timer()
            if not immediate:
                self._timer = self._timer_factory(self.delay, self._fire, args=(generation,))
                self._timer.daemon = True
                self._timer.start()
                _log_debug(f"Preview #{generation} scheduled in {self.delay:.2f}s")
                return None

        return self._run(generation)

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        with self._lock:
            self._cancel_timer()

    def current(self) -> PreviewArtifact:
        """The latest artifact, generating one now if none exists yet."""
        if self.artifact.data is None:
            return self.request_update(immediate=True)
        return self.artifact

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self._run(generation)

    def _run(self, generation: int) -> PreviewArtifact:
        with self._run_lock:
            try:
                data = self._generate()
            except Exception as e:
                _log_error(f"Preview #{generation} failed: {e}")
                raise
            if data is None:
                _log_debug(f"Preview #{generation} produced nothing, keeping #{self.artifact.generation}")
                return self.artifact
            self.artifact = PreviewArtifact(data=data, generation=generation, committed_at=now_exact())
            artifact = self.artifact

        log_preview_committed(generation, len(data))
        if self.on_commit is not None:
            self.on_commit(artifact)
        return artifact
