"""Data models for gazetteer records, clusters and verification results."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Callable, Tuple


@dataclass(eq=False)
class Record:
    """One gazetteer name row.
    
    Records compare by identity: two rows with identical fields are still
    distinct names.
    """
    place_id: Optional[int]
    name_id: Optional[int]
    name_type: str = ""
    language_code: str = ""
    full_name: str = ""
    link_id: Optional[int] = None
    translit_system_code: str = ""
    full_name_rg: str = ""
    mgrs: str = ""
    script_code: str = ""
    line: Optional[int] = None
    
    def is_script_variant(self, script_name_types) -> bool:
        return self.name_type in script_name_types


# A cluster is frozen once built; members keep input order.
Cluster = Tuple[Record, ...]


class UsabilityVerdict(str, Enum):
    TOO_SHORT = "too_short"
    NO_SCRIPT_VARIANT = "no_script_variant"
    NO_TRANSLIT_VARIANT = "no_translit_variant"
    MULTIPLE_SCRIPT_VARIANTS = "multiple_script_variants"
    UNSUPPORTED_MAP = "unsupported_map"
    USABLE = "usable"


class ComparisonResult(str, Enum):
    OK = "ok"
    CASING = "casing"
    PUNCTUATION = "punctuation"
    CASING_AND_PUNCTUATION = "casing_and_punctuation"
    SPACING_OR_PUNCTUATION = "spacing_or_punctuation"
    CASING_AND_SPACING_OR_PUNCTUATION = "casing_and_spacing_or_punctuation"
    TRANSLITERATION = "transliteration"


DUPLICATE_NAME_ID = "duplicate_name_id"

# Error kinds for which the report lists other maps reproducing the pair
DETECTABLE_KINDS = frozenset({
    UsabilityVerdict.NO_TRANSLIT_VARIANT.value,
    ComparisonResult.TRANSLITERATION.value,
})


@dataclass
class Comparison:
    """Outcome of checking one transliterated variant against its original."""
    original: Record
    variant: Record
    # None when no map could transliterate the pair
    result: Optional[ComparisonResult]
    map_id: Optional[str] = None
    attempted: Optional[str] = None
    attempted_rg: Optional[str] = None
    
    @property
    def ok(self) -> bool:
        return self.result is ComparisonResult.OK
    
    @property
    def attempted_text(self) -> Optional[str]:
        """Engine output for the report; both forms when the reversed generic name failed."""
        if self.attempted_rg is not None and self.result not in (None, ComparisonResult.OK):
            return f"{self.attempted} | {self.attempted_rg}"
        return self.attempted


@dataclass
class SystemTally:
    """Verification totals for one transliteration system code."""
    system_code: str
    total: int = 0
    ok: int = 0
    errors: Dict[str, int] = field(default_factory=dict)
    
    @property
    def accuracy(self) -> float:
        return self.ok * 100.0 / self.total if self.total else 0.0
    
    def add(self, kind: str):
        self.total += 1
        if kind == ComparisonResult.OK.value:
            self.ok += 1
        else:
            self.errors[kind] = self.errors.get(kind, 0) + 1


def _blank_if_none(value):
    return "" if value is None else value


@dataclass(eq=False)
class ErrorRecord:
    """One row of the error report.
    
    `other_maps` is a deferred computation; it is evaluated during report
    emission, once per emission.
    """
    error_id: int
    error_type: str
    record: Record
    attempted: Optional[str] = None
    original: Optional[Record] = None
    other_maps: Optional[Callable[[], List[str]]] = None
    
    def to_row(self, other_matching_maps: Optional[List[str]] = None) -> Dict[str, Any]:
        """Flatten to a report row."""
        record = self.record
        script_source = self.original if self.original is not None else record
        return {
            "error_id": self.error_id,
            "error_type": self.error_type,
            "place_id": _blank_if_none(record.place_id),
            "name_id": _blank_if_none(record.name_id),
            "name_type": record.name_type,
            "full_name": record.full_name,
            "language_code": record.language_code,
            "translit_system_code": record.translit_system_code,
            "script_variant_code": script_source.script_code,
            "attempted_transliteration": self.attempted or "",
            "other_matching_maps": ",".join(other_matching_maps or []),
        }
