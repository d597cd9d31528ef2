"""Re-run transliteration on usable clusters and classify the results."""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from geotest.core.comparison import classify
from geotest.core.engine import Compiled, TransliterationEngine
from geotest.core.models import Cluster, Comparison, ComparisonResult, Record, SystemTally, UsabilityVerdict
from geotest.core.usability import MapResolver, UsabilityClassifier
from geotest.utils.error_tracking import capture_exception
from geotest.utils.logging import log_error

logger = logging.getLogger("geotest")

UNSUPPORTED = UsabilityVerdict.UNSUPPORTED_MAP.value


class CompilerCache:
    """Compiled maps keyed by map identifier, shared across clusters."""
    
    def __init__(self, engine: TransliterationEngine):
        self.engine = engine
        self._compiled: Dict[str, Compiled] = {}
    
    def get(self, map_id: str) -> Compiled:
        """Compile a map on first use; engine errors propagate to the caller."""
        if map_id not in self._compiled:
            self._compiled[map_id] = self.engine.compile(map_id)
        return self._compiled[map_id]
    
    def __contains__(self, map_id: str) -> bool:
        return map_id in self._compiled
    
    def __len__(self) -> int:
        return len(self._compiled)


@dataclass
class VerificationResult:
    """Comparisons for every (original, variant) pair plus per-system tallies."""
    # every checked pair, in cluster order
    pairs: List[Comparison] = field(default_factory=list)
    tallies: Dict[str, SystemTally] = field(default_factory=dict)
    
    @property
    def comparisons(self) -> List[Comparison]:
        """Pairs the engine could transliterate."""
        return [c for c in self.pairs if c.result is not None]
    
    @property
    def unsupported(self) -> List[Comparison]:
        return [c for c in self.pairs if c.result is None]
    
    @property
    def errors(self) -> List[Comparison]:
        return [c for c in self.comparisons if not c.ok]
    
    def tally(self, system_code: str, kind: str):
        if system_code not in self.tallies:
            self.tallies[system_code] = SystemTally(system_code)
        self.tallies[system_code].add(kind)


class VerificationDriver:
    """Transliterate the original-script name of each usable cluster and check every variant."""
    
    def __init__(
        self,
        classifier: UsabilityClassifier,
        compilers: CompilerCache,
        progress: Optional[bool] = None,
    ):
        self.classifier = classifier
        self.resolver: MapResolver = classifier.resolver
        self.compilers = compilers
        # None lets tqdm decide based on whether stderr is a terminal
        self.progress = progress
    
    def original_of(self, cluster: Cluster) -> Record:
        originals = self.classifier.script_variants(cluster)
        if len(originals) != 1:
            raise ValueError(f"expected exactly one original-script record, found {len(originals)}")
        return originals[0]
    
    def _transliterate(self, map_id: str, text: str, variant: Record) -> Optional[str]:
        try:
            return self.compilers.get(map_id)(text)
        except Exception as e:
            log_error(e, {"operation": "compile", "map_id": map_id, "name_id": variant.name_id})
            capture_exception(e, {"map_id": map_id})
            return None
    
    def check_pair(self, original: Record, variant: Record) -> Comparison:
        """Compare one variant against the engine's transliteration of the original."""
        map_id = self.resolver.resolve(variant.translit_system_code)
        if map_id is None:
            return Comparison(original, variant, None, map_id=None)
        
        attempted = self._transliterate(map_id, original.full_name, variant)
        if attempted is None:
            return Comparison(original, variant, None, map_id=map_id)
        
        result = classify(attempted, variant.full_name)
        attempted_rg = None
        if result is ComparisonResult.OK and original.full_name_rg and variant.full_name_rg:
            attempted_rg = self._transliterate(map_id, original.full_name_rg, variant)
            if attempted_rg is None:
                return Comparison(original, variant, None, map_id=map_id)
            result = classify(attempted_rg, variant.full_name_rg)
        
        return Comparison(original, variant, result, map_id=map_id,
                          attempted=attempted, attempted_rg=attempted_rg)
    
    def verify(self, clusters: Iterable[Cluster]) -> VerificationResult:
        """
        Check every variant of every usable cluster.
        
        Pairs whose system has no map, or whose map fails to compile, are
        collected under `unsupported` and tallied as unsupported_map.
        """
        outcome = VerificationResult()
        clusters = list(clusters)
        disable = None if self.progress is None else not self.progress
        for cluster in tqdm(clusters, desc="Verifying", unit="cluster", disable=disable):
            original = self.original_of(cluster)
            for variant in cluster:
                if variant is original:
                    continue
                comparison = self.check_pair(original, variant)
                outcome.pairs.append(comparison)
                kind = comparison.result.value if comparison.result is not None else UNSUPPORTED
                outcome.tally(variant.translit_system_code, kind)
        
        logger.info("Verified %d pairs in %d clusters using %d maps",
                    len(outcome.comparisons), len(clusters), len(self.compilers))
        return outcome
