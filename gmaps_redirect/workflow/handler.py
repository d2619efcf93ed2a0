"""Host-side handling of incoming map links."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from gmaps_redirect.clients import MapsClient, NetworkError
from gmaps_redirect.config import Settings
from gmaps_redirect.models import LinkOutcome
from gmaps_redirect.services.logging import console_kwargs
from gmaps_redirect.services.trace import TraceLog
from gmaps_redirect.workflow.resolve import (
    ResolutionCancelled,
    TooManyRedirects,
    resolve_link,
)

logger = logging.getLogger(__name__)

UNRESOLVED_MESSAGE = "unable to resolve geo :("

ClientFactory = Callable[[Settings], MapsClient]


def _default_client_factory(settings: Settings) -> MapsClient:
    return MapsClient(timeout=settings.request_timeout)


def _noop(_: str) -> None:
    return None


@dataclass
class _Run:
    """Mutable bookkeeping for one in-flight resolution."""

    url: str
    trace: TraceLog = field(default_factory=TraceLog)
    cancel_event: threading.Event = field(default_factory=threading.Event)
    client: Optional[MapsClient] = None
    future: "Future[Optional[LinkOutcome]]" = field(default_factory=Future)
    # Guards outcome delivery against a concurrent cancel().
    lock: threading.Lock = field(default_factory=threading.Lock)


class LinkHandler:
    """
    Resolve incoming links off the caller's thread and deliver the outcome.

    Each submitted link gets its own trace and cancellation flag. Once
    resolution finishes, the location is handed to ``open_location`` or
    the failure to ``report_failure``; the accumulated trace always goes to
    ``publish_trace``. Cancelled runs deliver nothing: their future settles
    as soon as :meth:`cancel` is called, and whatever the worker produces
    afterwards is discarded.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        open_location: Callable[[str], None] = _noop,
        report_failure: Callable[[str], None] = _noop,
        publish_trace: Callable[[str], None] = _noop,
        client_factory: ClientFactory = _default_client_factory,
    ) -> None:
        self.settings = settings or Settings()
        self._open_location = open_location
        self._report_failure = report_failure
        self._publish_trace = publish_trace
        self._client_factory = client_factory
        self._executor = ThreadPoolExecutor(thread_name_prefix="gmaps-redirect")
        self._lock = threading.Lock()
        self._runs: List[_Run] = []

    def submit(self, url: Optional[str]) -> "Future[Optional[LinkOutcome]]":
        """Schedule resolution of ``url``; blank input resolves to ``None``."""
        if url is None or not url.strip():
            future: "Future[Optional[LinkOutcome]]" = Future()
            future.set_result(None)
            return future

        run = _Run(url=url)
        with self._lock:
            self._runs.append(run)
        self._executor.submit(self._run, run)
        return run.future

    def handle(self, url: Optional[str]) -> Optional[LinkOutcome]:
        """Resolve ``url`` on a worker thread and wait for the outcome."""
        return self.submit(url).result()

    def cancel(self) -> None:
        """Cancel every outstanding resolution and abandon in-flight requests."""
        with self._lock:
            runs = list(self._runs)
            self._runs.clear()
        for run in runs:
            with run.lock:
                run.cancel_event.set()
                if not run.future.done():
                    run.future.set_result(self._cancelled(run))
            if run.client is not None:
                run.client.close()

    def shutdown(self) -> None:
        self.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "LinkHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.shutdown()

    def _run(self, run: _Run) -> None:
        try:
            outcome = self._resolve(run)
        except Exception as exc:
            with run.lock:
                if not run.future.done():
                    run.future.set_exception(exc)
        else:
            with run.lock:
                if not run.future.done():
                    run.future.set_result(outcome)
        finally:
            with self._lock:
                if run in self._runs:
                    self._runs.remove(run)

    def _resolve(self, run: _Run) -> LinkOutcome:
        trace = run.trace
        error: Optional[str] = None
        location = None

        if run.cancel_event.is_set():
            return self._cancelled(run)

        client = self._client_factory(self.settings)
        run.client = client
        try:
            location = resolve_link(
                run.url,
                trace,
                client,
                max_redirects=self.settings.max_redirects,
                cancel_event=run.cancel_event,
            )
        except ResolutionCancelled:
            return self._cancelled(run)
        except (NetworkError, TooManyRedirects) as exc:
            if run.cancel_event.is_set():
                return self._cancelled(run)
            logger.warning("Resolution of %s failed: %s", run.url, exc, extra=console_kwargs())
            error = str(exc)
            trace.append(f"err: {exc}")
        except Exception:
            # Closing the client under a running request surfaces as an
            # arbitrary transport error.
            if run.cancel_event.is_set():
                return self._cancelled(run)
            raise
        finally:
            client.close()

        with run.lock:
            if run.cancel_event.is_set():
                return self._cancelled(run)

            if location is not None:
                logger.info("Resolved %s to %s", run.url, location, extra=console_kwargs())
                self._open_location(location.to_uri())
            else:
                if error is None:
                    error = UNRESOLVED_MESSAGE
                    trace.append(f"err: {UNRESOLVED_MESSAGE}")
                self._report_failure(error)

            trace.append(f"-> {run.url}")
            rendered = trace.render()
            self._publish_trace(rendered)
        return LinkOutcome(url=run.url, location=location, trace=rendered, error=error)

    @staticmethod
    def _cancelled(run: _Run) -> LinkOutcome:
        run.trace.close()
        logger.info("Resolution of %s cancelled", run.url)
        return LinkOutcome(url=run.url, trace=run.trace.render(), cancelled=True)


__all__ = ["LinkHandler", "UNRESOLVED_MESSAGE"]
