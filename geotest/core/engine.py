"""Transliteration engine interface and a JSON map-directory implementation."""
import json
import re
from abc import ABC, abstractmethod
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from rapidfuzz.distance import Levenshtein

Compiled = Callable[[str], str]


class MapNotFoundError(LookupError):
    """The requested map identifier does not exist or cannot be loaded."""


class TransliterationEngine(ABC):
    """Base class for transliteration engines."""
    
    @abstractmethod
    def locate(self, system_code: str) -> Optional[str]:
        """
        Find the map implementing a gazetteer transliteration system.
        
        Args:
            system_code: Transliteration system code from the gazetteer
            
        Returns:
            Map identifier, or None if no map implements the system
        """
    
    @abstractmethod
    def compile(self, map_id: str) -> Compiled:
        """
        Load a map into a reusable transliteration function.
        
        Raises:
            MapNotFoundError: if the map identifier is unknown
        """
    
    @abstractmethod
    def detect(self, source: str, target: str, pattern: str = "*") -> Dict[str, int]:
        """
        Score every map matching `pattern` on how closely it turns `source` into `target`.
        
        Returns:
            Map identifier -> edit distance (0 means an exact reproduction)
        """


class MapDirectoryEngine(TransliterationEngine):
    """
    Engine backed by a directory of JSON map files.
    
    Each `<map_id>.json` file looks like::
    
        {"systems": ["BGN/PCGN 1947"], "rules": [["щ", "shch"], ["ш", "sh"]]}
    
    Rules are applied left to right, longest source sequence first; text
    without a matching rule is copied through unchanged.
    """
    
    def __init__(self, maps_dir: Union[str, Path]):
        self.maps_dir = Path(maps_dir)
        self._catalog: Optional[Dict[str, Path]] = None
        self._systems: Dict[str, str] = {}
        self._compiled: Dict[str, Compiled] = {}
    
    @property
    def catalog(self) -> Dict[str, Path]:
        if self._catalog is None:
            self._catalog = {}
            if self.maps_dir.is_dir():
                for path in sorted(self.maps_dir.glob("*.json")):
                    self._catalog[path.stem] = path
        return self._catalog
    
    def map_ids(self) -> List[str]:
        return list(self.catalog)
    
    def _load(self, map_id: str) -> dict:
        path = self.catalog.get(map_id)
        if path is None:
            raise MapNotFoundError(f"map not found: {map_id}")
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise MapNotFoundError(f"cannot load map {map_id}: {e}") from e
    
    def locate(self, system_code: str) -> Optional[str]:
        if not system_code:
            return None
        if not self._systems:
            for map_id in self.catalog:
                try:
                    systems = self._load(map_id).get("systems", [])
                except MapNotFoundError:
                    continue
                for code in systems:
                    self._systems.setdefault(code, map_id)
        if system_code in self._systems:
            return self._systems[system_code]
        return system_code if system_code in self.catalog else None
    
    def compile(self, map_id: str) -> Compiled:
        if map_id in self._compiled:
            return self._compiled[map_id]
        
        rules = {k: v for k, v in self._load(map_id).get("rules", []) if k}
        if rules:
            # Longest source first so multi-character rules win
            keys = sorted(rules, key=len, reverse=True)
            pattern = re.compile("|".join(re.escape(k) for k in keys))
            
            def transliterate(text: str) -> str:
                return pattern.sub(lambda m: rules[m.group(0)], text)
        else:
            def transliterate(text: str) -> str:
                return text
        
        self._compiled[map_id] = transliterate
        return transliterate
    
    def detect(self, source: str, target: str, pattern: str = "*") -> Dict[str, int]:
        scores = {}
        for map_id in self.catalog:
            if not fnmatchcase(map_id, pattern):
                continue
            try:
                output = self.compile(map_id)(source)
            except MapNotFoundError:
                continue
            scores[map_id] = Levenshtein.distance(output, target)
        return scores
