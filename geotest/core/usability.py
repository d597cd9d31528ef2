"""Screen clusters for whether they can be used to test transliteration."""
import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from geotest.core.config import SCRIPT_NAME_TYPES
from geotest.core.engine import TransliterationEngine
from geotest.core.models import Cluster, UsabilityVerdict
from geotest.utils.error_tracking import capture_exception
from geotest.utils.logging import log_error

logger = logging.getLogger("geotest")


class MapResolver:
    """Cached system code -> map identifier lookups against an engine."""
    
    def __init__(self, engine: TransliterationEngine):
        self.engine = engine
        self._cache: Dict[str, Optional[str]] = {}
    
    def resolve(self, system_code: str) -> Optional[str]:
        if not system_code:
            return None
        if system_code not in self._cache:
            try:
                self._cache[system_code] = self.engine.locate(system_code)
            except Exception as e:
                log_error(e, {"operation": "locate", "system_code": system_code})
                capture_exception(e, {"system_code": system_code})
                self._cache[system_code] = None
            if self._cache[system_code] is None:
                logger.debug("No map for transliteration system %r", system_code)
        return self._cache[system_code]


Rule = Tuple[UsabilityVerdict, Callable[[Cluster], bool]]


class UsabilityClassifier:
    """
    Ordered rule chain assigning one UsabilityVerdict per cluster.
    
    Rules are checked top to bottom and the first match wins; a cluster
    matching none is usable.
    """
    
    def __init__(self, resolver: MapResolver, script_name_types: Iterable[str] = SCRIPT_NAME_TYPES):
        self.resolver = resolver
        self.script_name_types: FrozenSet[str] = frozenset(script_name_types)
        self.rules: List[Rule] = [
            (UsabilityVerdict.TOO_SHORT, lambda c: len(c) < 2),
            (UsabilityVerdict.NO_SCRIPT_VARIANT, lambda c: self.count_script_variants(c) == 0),
            (UsabilityVerdict.NO_TRANSLIT_VARIANT, lambda c: all(r.translit_system_code == "" for r in c)),
            (UsabilityVerdict.MULTIPLE_SCRIPT_VARIANTS, lambda c: self.count_script_variants(c) > 1),
            (UsabilityVerdict.UNSUPPORTED_MAP,
             lambda c: not any(self.resolver.resolve(r.translit_system_code) for r in c)),
        ]
    
    def count_script_variants(self, cluster: Cluster) -> int:
        return sum(1 for r in cluster if r.is_script_variant(self.script_name_types))
    
    def script_variants(self, cluster: Cluster) -> list:
        return [r for r in cluster if r.is_script_variant(self.script_name_types)]
    
    def classify(self, cluster: Cluster) -> UsabilityVerdict:
        for verdict, applies in self.rules:
            if applies(cluster):
                return verdict
        return UsabilityVerdict.USABLE
    
    def partition(self, clusters: Iterable[Cluster]) -> Dict[UsabilityVerdict, List[Cluster]]:
        """Verdict -> clusters, with every verdict present in declaration order."""
        groups: Dict[UsabilityVerdict, List[Cluster]] = {v: [] for v in UsabilityVerdict}
        for cluster in clusters:
            groups[self.classify(cluster)].append(cluster)
        return groups
