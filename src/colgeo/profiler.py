"""Timing of named, possibly nested, sections of code.

A process-wide :class:`Profiler` is exposed through the module-level
functions, which do nothing unless profiling is enabled::

    from colgeo import profiler

    profiler.start()
    with profiler.block("broadphase"):
        ...
    profiler.stop()
    profiler.status()

Profiling is enabled unless the ``COLGEO_ENABLE_PROFILING`` environment
variable is set to ``0``, ``false``, ``no`` or ``off``. Explicitly created
``Profiler`` instances always record.
"""
import collections
import contextlib
import logging
import os
import threading
import time


logger = logging.getLogger(__name__)

ENABLE_PROFILING = os.environ.get("COLGEO_ENABLE_PROFILING", "1").lower() not in (
    "0",
    "false",
    "no",
    "off",
)


class TimeInfo:
    """Accumulated timing of one named section."""

    def __init__(self):
        self.total = 0.0
        self.shortest = float("inf")
        self.longest = 0.0
        self.parts = 0

    def update(self, dt):
        """Record one run of the section lasting ``dt`` seconds."""
        self.total += dt
        self.shortest = min(self.shortest, dt)
        self.longest = max(self.longest, dt)
        self.parts += 1

    def merge(self, other):
        self.total += other.total
        self.shortest = min(self.shortest, other.shortest)
        self.longest = max(self.longest, other.longest)
        self.parts += other.parts


class _PerThreadInfo:
    def __init__(self):
        self.events = collections.Counter()
        # name -> [sum, count]
        self.averages = collections.defaultdict(lambda: [0.0, 0])
        self.times = collections.defaultdict(TimeInfo)
        # (name, start time) of the currently open sections, innermost last
        self.stack = []
        # time spent in sections that were not nested in another one
        self.outermost = 0.0


class Profiler:
    """Collects counts, averages and section timings across threads.

    Data are only recorded between :meth:`start` and :meth:`stop`.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._running = False
        self._total = 0.0
        self._start = None
        self._data = collections.defaultdict(_PerThreadInfo)

    def _thread_data(self):
        return self._data[threading.get_ident()]

    def start(self):
        """Start recording. Data from earlier runs are kept."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._start = time.perf_counter()
        logger.debug("Profiler started")

    def stop(self):
        """Stop recording."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._total += time.perf_counter() - self._start
            self._start = None

            # sections still open are discarded
            for data in self._data.values():
                data.stack.clear()
        logger.debug("Profiler stopped")

    def clear(self):
        """Discard all recorded data."""
        with self._lock:
            self._data.clear()
            self._total = 0.0
            if self._running:
                self._start = time.perf_counter()

    def running(self):
        return self._running

    def event(self, name, times=1):
        """Count ``times`` occurrences of the event ``name``."""
        with self._lock:
            if self._running:
                self._thread_data().events[name] += times

    def average(self, name, value):
        """Record a value whose average is reported under ``name``."""
        with self._lock:
            if self._running:
                entry = self._thread_data().averages[name]
                entry[0] += value
                entry[1] += 1

    def begin(self, name):
        """Begin timing the section ``name``."""
        with self._lock:
            if self._running:
                data = self._thread_data()
                data.stack.append((name, time.perf_counter()))

    def end(self, name):
        """End timing the section ``name``."""
        with self._lock:
            if not self._running:
                return
            now = time.perf_counter()
            data = self._thread_data()
            names = [entry[0] for entry in data.stack]
            if name not in names:
                logger.warning("Ending section %r which was not begun", name)
                return
            if names[-1] != name:
                logger.warning(
                    "Section %r ended while %r is still open", name, names[-1]
                )

            # close the innermost open section with this name
            idx = len(names) - 1 - names[::-1].index(name)
            _, start = data.stack.pop(idx)
            dt = now - start
            data.times[name].update(dt)
            if idx == 0:
                data.outermost += dt

    @contextlib.contextmanager
    def block(self, name):
        """Context manager timing the enclosed code as section ``name``."""
        self.begin(name)
        try:
            yield
        finally:
            self.end(name)

    def _merged(self):
        merged = _PerThreadInfo()
        for data in self._data.values():
            merged.events.update(data.events)
            for name, (s, n) in data.averages.items():
                merged.averages[name][0] += s
                merged.averages[name][1] += n
            for name, info in data.times.items():
                merged.times[name].merge(info)
            merged.outermost += data.outermost
        return merged

    def status(self, out=None, merge=True):
        """Report the recorded data.

        Parameters
        ----------
        out : file-like, optional
            Stream to write the report to. If ``None``, the report is logged
            at INFO level.
        merge : bool
            If ``True``, data from all threads are combined into one report;
            otherwise each thread is reported separately.

        Returns
        -------
        : str
            The report.
        """
        with self._lock:
            total = self._total
            if self._running:
                total += time.perf_counter() - self._start

            if merge:
                sections = [("", self._merged())]
            else:
                sections = [
                    (f"Thread {ident}:", data) for ident, data in self._data.items()
                ]
            lines = [f" *** Profiling statistics. Total counted time : {total:.6f} seconds"]
            for header, data in sections:
                if header:
                    lines.append(header)
                lines.extend(_format_data(data, total))
        report = "\n".join(lines) + "\n"

        if out is None:
            logger.info("%s", report)
        else:
            out.write(report)
        return report


def _format_data(data, total):
    lines = []
    if data.events:
        lines.append("Events:")
        for name, count in sorted(data.events.items(), key=lambda x: -x[1]):
            lines.append(f"{name}: {count}")

    if data.averages:
        lines.append("Averages:")
        for name, (s, n) in sorted(data.averages.items()):
            lines.append(f"{name}: {s / n:.6g} (over {n} values)")

    if data.times:
        lines.append("Blocks of time:")
        for name, info in sorted(data.times.items(), key=lambda x: -x[1].total):
            if info.parts == 0:
                continue
            pct = 100.0 * info.total / total if total > 0 else 0.0
            lines.append(
                f"* {name}: {info.total:.6f}s ({pct:.1f}%), "
                f"[{info.shortest:.6f}s --> {info.total / info.parts:.6f}s --> "
                f"{info.longest:.6f}s] over {info.parts} runs"
            )

        unaccounted = total - data.outermost
        if unaccounted > 0:
            lines.append(f"Unaccounted time : {unaccounted:.6f}s")
    return lines


_default_profiler = Profiler()


def get_profiler():
    """The process-wide profiler."""
    return _default_profiler


def start():
    if ENABLE_PROFILING:
        _default_profiler.start()


def stop():
    if ENABLE_PROFILING:
        _default_profiler.stop()


def clear():
    _default_profiler.clear()


def running():
    return _default_profiler.running()


def event(name, times=1):
    if ENABLE_PROFILING:
        _default_profiler.event(name, times=times)


def average(name, value):
    if ENABLE_PROFILING:
        _default_profiler.average(name, value)


def begin(name):
    if ENABLE_PROFILING:
        _default_profiler.begin(name)


def end(name):
    if ENABLE_PROFILING:
        _default_profiler.end(name)


def block(name):
    if ENABLE_PROFILING:
        return _default_profiler.block(name)
    return contextlib.nullcontext()


def status(out=None, merge=True):
    return _default_profiler.status(out=out, merge=merge)
