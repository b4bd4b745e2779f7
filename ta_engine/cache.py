"""
AnalysisCache: bounded in-memory cache of analysis reports.

Reports are cached by a fingerprint of the series content and the
parameters, so identical requests reuse one computation. The cache is
read-mostly: a per-key lock ensures only one thread computes a given key
while concurrent identical requests wait for its result.
"""
from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .analysis import SeriesInput, analyze, _coerce_series, _coerce_sub_scores
from .scoring.config import AnalysisParams, SubScores, resolve_params
from .shared.types import AnalysisReport, TimeSeries

DEFAULT_MAX_ENTRIES = 128


def compute_fingerprint(
    series: TimeSeries,
    params: AnalysisParams,
    sub_scores: Optional[SubScores] = None,
) -> str:
    """
    Compute content-addressable fingerprint for an analysis request.

    The fingerprint is a hash of:
    - prices, volumes, highs and lows (raw bytes)
    - timestamps (they appear in the report's levels)
    - every analysis parameter and the sub-scores (sorted JSON)

    Returns:
        SHA256 hex string (first 16 chars)
    """
    h = hashlib.sha256()
    for name in ("prices", "volumes", "highs", "lows"):
        values = getattr(series, name)
        h.update(name.encode())
        h.update(b"-" if values is None else values.tobytes())
    h.update(repr(series.timestamps.tolist()).encode())

    fp_input = {
        "params": params.fingerprint_payload(),
        "sub_scores": None if sub_scores is None else vars(sub_scores),
    }
    h.update(json.dumps(fp_input, sort_keys=True, default=str).encode())
    return h.hexdigest()[:16]


class AnalysisCache:
    """
    LRU cache of AnalysisReport objects keyed by request fingerprint.

    Cached reports are shared between callers and must be treated as read-only.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        """
        Initialize analysis cache.

        Args:
            max_entries: Maximum number of reports kept (least recently used evicted first)
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, AnalysisReport]" = OrderedDict()
        self._lock = threading.Lock()
        self._key_locks: Dict[str, threading.Lock] = {}

        # Track stats
        self.hits = 0
        self.misses = 0

    def get(self, fingerprint: str) -> Optional[AnalysisReport]:
        """
        Retrieve cached report by fingerprint.

        Returns:
            Cached report or None if not found
        """
        with self._lock:
            report = self._entries.get(fingerprint)
            if report is None:
                self.misses += 1
                return None
            self._entries.move_to_end(fingerprint)
            self.hits += 1
            return report

    def put(self, fingerprint: str, report: AnalysisReport) -> None:
        """Store report in cache, evicting the least recently used entry when full."""
        with self._lock:
            self._entries[fingerprint] = report
            self._entries.move_to_end(fingerprint)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def get_or_compute(self, fingerprint: str, compute: Callable[[], AnalysisReport]) -> AnalysisReport:
        """
        Return the cached report, or compute and store it.

        Only one thread computes a given fingerprint; others block on the
        key's lock and then read the stored result. If compute raises, the
        error propagates and nothing is cached.
        """
        report = self.get(fingerprint)
        if report is not None:
            return report

        with self._lock:
            key_lock = self._key_locks.setdefault(fingerprint, threading.Lock())

        try:
            with key_lock:
                with self._lock:
                    report = self._entries.get(fingerprint)
                if report is None:
                    report = compute()
                    self.put(fingerprint, report)
        finally:
            with self._lock:
                if self._key_locks.get(fingerprint) is key_lock:
                    del self._key_locks[fingerprint]
        return report

    def analyze(
        self,
        series: SeriesInput,
        volumes: Optional[Sequence[float]] = None,
        params: Optional[Union[AnalysisParams, Dict[str, Any]]] = None,
        sub_scores: Optional[Union[SubScores, Dict[str, float]]] = None,
    ) -> AnalysisReport:
        """Cached equivalent of ta_engine.analyze()."""
        series = _coerce_series(series, volumes)
        params = resolve_params(params)
        sub_scores = _coerce_sub_scores(sub_scores)
        fingerprint = compute_fingerprint(series, params, sub_scores)
        return self.get_or_compute(
            fingerprint, lambda: analyze(series, params=params, sub_scores=sub_scores)
        )

    def clear(self) -> None:
        """Clear all cached reports."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self.hits + self.misses
            hit_rate = (self.hits / total * 100) if total > 0 else 0
            return {
                "hits": self.hits,
                "misses": self.misses,
                "total_requests": total,
                "hit_rate_pct": hit_rate,
                "entries": len(self._entries),
                "max_entries": self.max_entries,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"AnalysisCache(entries={stats['entries']}/{stats['max_entries']}, "
            f"hits={stats['hits']}, misses={stats['misses']}, "
            f"hit_rate={stats['hit_rate_pct']:.1f}%)"
        )
