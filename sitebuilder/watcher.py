"""Rebuild the site when the content, templates or assets change."""

import os
import threading
import time
from typing import Iterable, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .builder import SiteBuilder


DEBOUNCE_SECONDS = 0.2
# Opened/closed events fire when the build itself reads the sources
CHANGE_EVENTS = {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}


class RebuildScheduler:
    """Merges bursts of change events into a single pending rebuild.

    Events arrive on the observer thread; rebuilds run on the thread that
    calls take_due(), so two rebuilds can never overlap.
    """

    def __init__(self, debounce_seconds: float = DEBOUNCE_SECONDS):
        self.debounce_seconds = debounce_seconds
        self._lock = threading.Lock()
        self._last_event = None
        self._last_path = None

    def notify(self, path: str, now: Optional[float] = None):
        with self._lock:
            self._last_event = time.monotonic() if now is None else now
            self._last_path = path

    def take_due(self, now: Optional[float] = None) -> Optional[str]:
        """Return the last changed path once the burst has gone quiet, else None."""
        now = time.monotonic() if now is None else now
        with self._lock:
            if self._last_event is None or now - self._last_event < self.debounce_seconds:
                return None
            path = self._last_path
            self._last_event = None
            self._last_path = None
            return path


class ChangeHandler(FileSystemEventHandler):
    """Forwards file changes to the scheduler."""

    def __init__(self, scheduler: RebuildScheduler, ignore_dir: str = ''):
        self.scheduler = scheduler
        self.ignore_dir = os.path.abspath(ignore_dir) if ignore_dir else ''

    def on_any_event(self, event):
        if event.is_directory or event.event_type not in CHANGE_EVENTS:
            return
        path = os.path.abspath(event.src_path)
        # Writes into the output dir would otherwise retrigger the build
        if self.ignore_dir and path.startswith(self.ignore_dir + os.sep):
            return
        self.scheduler.notify(path)


def rebuild(builder: SiteBuilder, changed: str) -> bool:
    """Run one rebuild, reporting instead of raising so watching can go on."""
    print(f"\n  Changed: {changed}")
    try:
        builder.build()
    except Exception as e:
        print(f"  ✗ Build error: {e}")
        return False
    return True


def watch(builder: SiteBuilder, directories: Iterable[str],
          debounce_seconds: float = DEBOUNCE_SECONDS, poll_interval: float = 0.05):
    """Watch directories and rebuild until interrupted with Ctrl+C."""
    scheduler = RebuildScheduler(debounce_seconds)
    handler = ChangeHandler(scheduler, ignore_dir=builder.config.output_dir)
    observer = Observer()

    watched = 0
    for directory in directories:
        if directory and os.path.isdir(directory):
            observer.schedule(handler, directory, recursive=True)
            watched += 1

    observer.start()
    print(f"  Watching {watched} directories for changes (Ctrl+C to stop)...")
    try:
        while True:
            changed = scheduler.take_due()
            if changed is not None:
                rebuild(builder, changed)
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        print("\n  Stopped watching.")
    finally:
        observer.stop()
        observer.join()
