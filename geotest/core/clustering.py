"""Group linked name records into clusters of the same place."""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from geotest.core.indexer import RecordIndex
from geotest.core.models import Cluster, Record


class DisjointSet:
    """Union-find over arena indices with path compression and union by size."""
    
    def __init__(self, size: int):
        self.parent = list(range(size))
        self.size = [1] * size
    
    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root
    
    def union(self, a: int, b: int) -> int:
        a, b = self.find(a), self.find(b)
        if a == b:
            return a
        if self.size[a] < self.size[b]:
            a, b = b, a
        self.parent[b] = a
        self.size[a] += self.size[b]
        return a


@dataclass
class ClusterSet:
    """Partition of linked records into clusters."""
    clusters: List[Cluster] = field(default_factory=list)
    # arena index (input position) -> position in `clusters`
    membership: Dict[int, int] = field(default_factory=dict)
    # records without a link_id of their own; they may still be link targets
    unlinked: List[Record] = field(default_factory=list)
    # records whose link_id matches no name_id
    dangling: List[Record] = field(default_factory=list)
    
    @property
    def member_count(self) -> int:
        return sum(len(c) for c in self.clusters)
    
    def length_histogram(self) -> Dict[int, int]:
        """Cluster length -> number of clusters of that length, in first-seen order."""
        histogram: Dict[int, int] = {}
        for cluster in self.clusters:
            histogram[len(cluster)] = histogram.get(len(cluster), 0) + 1
        return histogram


def build_clusters(index: RecordIndex) -> ClusterSet:
    """
    Merge records connected by link_id -> name_id into clusters.
    
    Membership is transitive: if A links to B and B links to C, all three
    end up in one cluster. A record linking to itself forms a cluster of
    one. Records are tracked by input position, so rows with identical
    fields stay distinct members.
    
    Args:
        index: RecordIndex over all records
        
    Returns:
        ClusterSet with clusters ordered by when they were first touched
    """
    records: Sequence[Record] = index.records
    position = {id(record): i for i, record in enumerate(records)}
    forest = DisjointSet(len(records))
    touched: List[int] = []
    seen = set()
    result = ClusterSet()
    
    for i, record in enumerate(records):
        if record.link_id is None:
            result.unlinked.append(record)
            continue
        related = index.related(record)
        if related is None:
            result.dangling.append(record)
            continue
        j = position[id(related)]
        for k in (i, j):
            if k not in seen:
                seen.add(k)
                touched.append(k)
        forest.union(i, j)
    
    # Order clusters by their first touched member; members by input position
    root_order: Dict[int, int] = {}
    for k in touched:
        root_order.setdefault(forest.find(k), len(root_order))
    members: List[List[int]] = [[] for _ in root_order]
    for k in sorted(seen):
        slot = root_order[forest.find(k)]
        members[slot].append(k)
        result.membership[k] = slot
    
    result.clusters = [tuple(records[k] for k in group) for group in members]
    return result
