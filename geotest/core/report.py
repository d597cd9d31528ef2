"""Collect error records and write the tab-separated error report."""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from geotest.core.config import DETECT_BY_LANGUAGE, REPORT_COLUMNS, SUPPRESSED_ERRORS
from geotest.core.engine import TransliterationEngine
from geotest.core.models import (
    DETECTABLE_KINDS,
    DUPLICATE_NAME_ID,
    Cluster,
    Comparison,
    ErrorRecord,
    Record,
    UsabilityVerdict,
)
from geotest.utils.error_tracking import capture_exception
from geotest.utils.logging import log_error

logger = logging.getLogger("geotest")


class ErrorCollector:
    """
    Accumulates error records grouped into events.
    
    All rows emitted for one event (a duplicate name id group, an unusable
    cluster, a failed pair) share one sequential error id. Kinds listed in
    `suppressed_kinds` are dropped without consuming an id.
    """
    
    def __init__(
        self,
        suppressed_kinds: Iterable[str] = SUPPRESSED_ERRORS,
        detector: Optional[TransliterationEngine] = None,
        scope_by_language: bool = DETECT_BY_LANGUAGE,
    ):
        self.suppressed_kinds = frozenset(suppressed_kinds)
        self.detector = detector
        self.scope_by_language = scope_by_language
        self.records: List[ErrorRecord] = []
        self.event_counts: Dict[str, int] = {}
        self._last_id = 0
    
    def is_suppressed(self, kind: str) -> bool:
        return kind in self.suppressed_kinds
    
    def open_event(self) -> int:
        self._last_id += 1
        return self._last_id
    
    def add(
        self,
        kind: str,
        records: Sequence[Record],
        attempted: Optional[str] = None,
        original: Optional[Record] = None,
    ) -> Optional[int]:
        """
        Record one event affecting `records`.
        
        Args:
            kind: Error kind (report error_type)
            records: Affected records; one report row each
            attempted: Engine output for the pair, if any
            original: Original-script record the rows were checked against
            
        Returns:
            The event's error id, or None if the kind is suppressed
        """
        if self.is_suppressed(kind):
            return None
        
        error_id = self.open_event()
        self.event_counts[kind] = self.event_counts.get(kind, 0) + 1
        for record in records:
            is_original = record is original
            self.records.append(ErrorRecord(
                error_id=error_id,
                error_type=kind,
                record=record,
                attempted=None if is_original else attempted,
                original=original,
                other_maps=self._deferred_detection(kind, original, record) if not is_original else None,
            ))
        return error_id
    
    def add_duplicates(self, duplicates: Dict[Optional[int], List[Record]]):
        for group in duplicates.values():
            self.add(DUPLICATE_NAME_ID, group)
    
    def add_cluster(self, verdict: UsabilityVerdict, cluster: Cluster, originals: Sequence[Record] = ()) -> Optional[int]:
        """Record an unusable cluster; every member becomes a row."""
        original = originals[0] if originals else None
        return self.add(verdict.value, cluster, original=original)
    
    def add_comparison(self, comparison: Comparison):
        """Record a failed or unsupported (original, variant) pair."""
        if comparison.ok:
            return
        kind = comparison.result.value if comparison.result is not None else UsabilityVerdict.UNSUPPORTED_MAP.value
        self.add(kind, [comparison.original, comparison.variant],
                 attempted=comparison.attempted_text, original=comparison.original)
    
    def _deferred_detection(self, kind: str, original: Optional[Record], record: Record):
        if kind not in DETECTABLE_KINDS or original is None or self.detector is None:
            return None
        return lambda: self.other_matching_maps(original, record)
    
    def map_pattern(self, record: Record) -> str:
        if self.scope_by_language and record.language_code:
            return f"*-{record.language_code}-*"
        return "*"
    
    def other_matching_maps(self, original: Record, record: Record) -> List[str]:
        """Maps that reproduce `record.full_name` exactly from the original-script name."""
        try:
            scores = self.detector.detect(original.full_name, record.full_name, self.map_pattern(record))
        except Exception as e:
            log_error(e, {"operation": "detect", "name_id": record.name_id})
            capture_exception(e, {"name_id": record.name_id})
            return []
        return sorted(map_id for map_id, score in scores.items() if score == 0)
    
    def finalize(self, kinds: Optional[Iterable[str]] = None) -> List[dict]:
        """
        Build report rows, evaluating deferred map detection once per row.
        
        Args:
            kinds: Only emit these error kinds (all when None)
        """
        wanted = frozenset(kinds) if kinds is not None else None
        rows = []
        for error in self.records:
            if wanted is not None and error.error_type not in wanted:
                continue
            other_maps = error.other_maps() if error.other_maps is not None else None
            rows.append(error.to_row(other_maps))
        return rows
    
    def to_frame(self, kinds: Optional[Iterable[str]] = None) -> pd.DataFrame:
        return pd.DataFrame(self.finalize(kinds), columns=REPORT_COLUMNS)
    
    def write(self, path: Union[str, Path], kinds: Optional[Iterable[str]] = None) -> int:
        """Write the error report as TSV; returns the number of rows written."""
        df = self.to_frame(kinds)
        df.to_csv(path, sep="\t", index=False, lineterminator="\n")
        logger.info("Wrote %d error rows to %s", len(df), path)
        return len(df)


def read_report(path: Union[str, Path]) -> pd.DataFrame:
    """Load an error report written by ErrorCollector.write."""
    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    df["error_id"] = df["error_id"].astype(int)
    return df
