"""Run the whole check: read, index, cluster, screen, verify, collect."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from geotest.core.clustering import ClusterSet, build_clusters
from geotest.core.config import DETECT_BY_LANGUAGE, SCRIPT_NAME_TYPES, SUPPRESSED_ERRORS
from geotest.core.engine import TransliterationEngine
from geotest.core.indexer import RecordIndex
from geotest.core.models import Cluster, Record, UsabilityVerdict
from geotest.core.reader import read_records
from geotest.core.report import ErrorCollector
from geotest.core.usability import MapResolver, UsabilityClassifier
from geotest.core.verification import CompilerCache, VerificationDriver, VerificationResult
from geotest.utils.timing import Timer

logger = logging.getLogger("geotest")


@dataclass
class GeoTestReport:
    """Everything the summary and the error report are rendered from."""
    index: RecordIndex
    clusters: ClusterSet
    usability: Dict[UsabilityVerdict, List[Cluster]]
    verification: VerificationResult
    errors: ErrorCollector
    resolver: MapResolver
    
    @property
    def usable(self) -> List[Cluster]:
        return self.usability[UsabilityVerdict.USABLE]


class GeoTest:
    """Checks a transliteration engine against a gazetteer."""
    
    def __init__(
        self,
        engine: TransliterationEngine,
        script_name_types: Iterable[str] = SCRIPT_NAME_TYPES,
        suppressed_kinds: Iterable[str] = SUPPRESSED_ERRORS,
        scope_by_language: bool = DETECT_BY_LANGUAGE,
        progress: Optional[bool] = None,
    ):
        self.engine = engine
        self.resolver = MapResolver(engine)
        self.classifier = UsabilityClassifier(self.resolver, script_name_types)
        self.compilers = CompilerCache(engine)
        self.suppressed_kinds = frozenset(suppressed_kinds)
        self.scope_by_language = scope_by_language
        self.progress = progress
    
    def run_file(self, path: Union[str, Path]) -> GeoTestReport:
        with Timer("read"):
            records = read_records(path)
        logger.info("Read %d records from %s", len(records), path)
        return self.run(records)
    
    def run(self, records: Iterable[Record]) -> GeoTestReport:
        errors = ErrorCollector(self.suppressed_kinds, detector=self.engine,
                                scope_by_language=self.scope_by_language)
        
        with Timer("index"):
            index = RecordIndex.build(records)
        errors.add_duplicates(index.duplicate_name_ids())
        
        with Timer("cluster"):
            clusters = build_clusters(index)
        
        with Timer("usability"):
            usability = self.classifier.partition(clusters.clusters)
        for verdict, group in usability.items():
            if verdict is UsabilityVerdict.USABLE:
                continue
            for cluster in group:
                errors.add_cluster(verdict, cluster, self.classifier.script_variants(cluster))
        
        driver = VerificationDriver(self.classifier, self.compilers, progress=self.progress)
        with Timer("verify"):
            verification = driver.verify(usability[UsabilityVerdict.USABLE])
        for comparison in verification.pairs:
            errors.add_comparison(comparison)
        
        return GeoTestReport(
            index=index,
            clusters=clusters,
            usability=usability,
            verification=verification,
            errors=errors,
            resolver=self.resolver,
        )
