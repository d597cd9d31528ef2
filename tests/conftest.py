"""Pytest configuration and fixtures."""
import json
import pytest
from typing import Dict, Optional
from geotest.core.engine import TransliterationEngine, MapNotFoundError
from geotest.core.models import Record


class FakeEngine(TransliterationEngine):
    """In-memory engine: each map is a character table applied left to right."""
    
    def __init__(self, maps: Dict[str, Dict[str, str]], systems: Dict[str, str], broken=()):
        self.maps = maps
        self.systems = systems
        self.broken = set(broken)
        self.locate_calls = []
        self.compile_calls = []
        self.detect_calls = []
    
    def locate(self, system_code: str) -> Optional[str]:
        self.locate_calls.append(system_code)
        return self.systems.get(system_code)
    
    def compile(self, map_id: str):
        self.compile_calls.append(map_id)
        if map_id in self.broken or map_id not in self.maps:
            raise MapNotFoundError(map_id)
        table = self.maps[map_id]
        return lambda text: "".join(table.get(c, c) for c in text)
    
    def detect(self, source: str, target: str, pattern: str = "*"):
        self.detect_calls.append((source, target, pattern))
        scores = {}
        for map_id in self.maps:
            if map_id in self.broken:
                continue
            output = self.compile(map_id)(source)
            scores[map_id] = 0 if output == target else 1
        return scores


CYRILLIC = {
    "М": "M", "К": "K", "а": "a", "в": "v", "е": "e", "и": "i",
    "к": "k", "м": "m", "н": "n", "о": "o", "с": "s",
}


@pytest.fixture
def engine():
    """Engine with one Russian map reachable through two system codes."""
    return FakeEngine(
        maps={"bgn-rus-Cyrl-Latn-1947": CYRILLIC, "simple-rus-Cyrl-Latn": {**CYRILLIC, "в": "w"}},
        systems={"BGN": "bgn-rus-Cyrl-Latn-1947", "ALT": "simple-rus-Cyrl-Latn"},
    )


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""
    def factory(name_id, link_id=None, name_type="V", full_name="", translit="", **kwargs):
        kwargs.setdefault("place_id", 100)
        return Record(
            name_id=name_id,
            link_id=link_id,
            name_type=name_type,
            full_name=full_name,
            translit_system_code=translit,
            **kwargs
        )
    return factory


@pytest.fixture
def moscow(make_record):
    """An original-script name with one matching transliterated variant."""
    return [
        make_record(1, name_type="NS", full_name="Москва", language_code="rus"),
        make_record(2, link_id=1, full_name="Moskva", translit="BGN", language_code="rus"),
    ]


GNS_HEADER = ["UFI", "UNI", "MGRS", "NT", "LC", "FULL_NAME_RO", "FULL_NAME_RG", "NAME_LINK", "TRANSL_CD"]


@pytest.fixture
def write_tsv(tmp_path):
    """Write rows under the GNS header to a TSV file and return its path."""
    def writer(rows, header=GNS_HEADER, name="names.txt", newline="\n"):
        path = tmp_path / name
        lines = ["\t".join(header)] + ["\t".join(str(v) for v in row) for row in rows]
        path.write_bytes((newline.join(lines) + newline).encode("utf-8"))
        return path
    return writer


@pytest.fixture
def maps_dir(tmp_path):
    """Directory with JSON maps for MapDirectoryEngine."""
    directory = tmp_path / "maps"
    directory.mkdir()
    (directory / "bgn-rus-Cyrl-Latn-1947.json").write_text(json.dumps({
        "systems": ["BGN"],
        "rules": [[k, v] for k, v in CYRILLIC.items()] + [["кв", "kv"], ["щ", "shch"]],
    }), encoding="utf-8")
    (directory / "din-deu-Cyrl-Latn.json").write_text(json.dumps({
        "systems": ["DIN"],
        "rules": [["щ", "schtsch"], ["в", "w"]],
    }), encoding="utf-8")
    (directory / "broken.json").write_text("{not json", encoding="utf-8")
    return directory
