"""Lookup tables over the full record list."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from geotest.core.models import Record


def _group_by(records: Sequence[Record], attr: str) -> Dict:
    groups: Dict = {}
    for record in records:
        groups.setdefault(getattr(record, attr), []).append(record)
    return groups


@dataclass
class RecordIndex:
    """Records grouped by place, by name id and by transliteration system."""
    records: List[Record]
    by_place_id: Dict[Optional[int], List[Record]] = field(default_factory=dict)
    by_name_id: Dict[Optional[int], List[Record]] = field(default_factory=dict)
    by_translit_system: Dict[str, List[Record]] = field(default_factory=dict)
    
    @classmethod
    def build(cls, records: Sequence[Record]) -> "RecordIndex":
        records = list(records)
        by_transl = _group_by(records, "translit_system_code")
        # Stable sort keeps first-seen order among groups of equal size
        by_transl = dict(sorted(by_transl.items(), key=lambda item: -len(item[1])))
        return cls(
            records=records,
            by_place_id=_group_by(records, "place_id"),
            by_name_id=_group_by(records, "name_id"),
            by_translit_system=by_transl,
        )
    
    def duplicate_name_ids(self) -> Dict[Optional[int], List[Record]]:
        """Name ids shared by more than one record (should be empty); rows without a name id are not duplicates."""
        return {k: v for k, v in self.by_name_id.items() if k is not None and len(v) > 1}
    
    def related(self, record: Record) -> Optional[Record]:
        """The record this one links to; the first occurrence wins on duplicates."""
        if record.link_id is None:
            return None
        matches = self.by_name_id.get(record.link_id)
        return matches[0] if matches else None
