"""Tests for clustering linked name records."""
from geotest.core.clustering import DisjointSet, build_clusters
from geotest.core.indexer import RecordIndex


def test_link_joins_record_and_target(make_record):
    records = [make_record(1), make_record(2, link_id=1)]
    result = build_clusters(RecordIndex.build(records))
    
    assert len(result.clusters) == 1
    assert result.clusters[0] == tuple(records)


def test_membership_is_transitive(make_record):
    """A -> B and B -> C put all three in one cluster."""
    a, b, c = make_record(1, link_id=2), make_record(2, link_id=3), make_record(3)
    result = build_clusters(RecordIndex.build([a, b, c]))
    
    assert len(result.clusters) == 1
    assert set(map(id, result.clusters[0])) == {id(a), id(b), id(c)}


def test_late_link_merges_existing_clusters(make_record):
    a = make_record(1)
    b = make_record(2, link_id=1)
    d = make_record(4, link_id=3)
    c = make_record(3, link_id=2)
    result = build_clusters(RecordIndex.build([a, b, d, c]))
    
    assert len(result.clusters) == 1
    # Members keep input order
    assert result.clusters[0] == (a, b, d, c)


def test_clusters_partition_linked_records(make_record):
    records = [
        make_record(1), make_record(2, link_id=1),
        make_record(3), make_record(4, link_id=3), make_record(5, link_id=4),
        make_record(6),
    ]
    result = build_clusters(RecordIndex.build(records))
    
    members = [id(r) for cluster in result.clusters for r in cluster]
    assert len(members) == len(set(members)) == 5
    assert [len(c) for c in result.clusters] == [2, 3]
    assert result.member_count == 5
    assert result.membership == {0: 0, 1: 0, 2: 1, 3: 1, 4: 1}


def test_clusters_in_first_touched_order(make_record):
    records = [make_record(1), make_record(2), make_record(3, link_id=2), make_record(4, link_id=1)]
    result = build_clusters(RecordIndex.build(records))
    
    assert [[r.name_id for r in c] for c in result.clusters] == [[2, 3], [1, 4]]


def test_identical_records_stay_distinct(make_record):
    """Two rows with the same fields are different members."""
    target = make_record(1)
    twin_a = make_record(2, link_id=1, full_name="Same")
    twin_b = make_record(2, link_id=1, full_name="Same")
    result = build_clusters(RecordIndex.build([target, twin_a, twin_b]))
    
    assert len(result.clusters) == 1
    assert len(result.clusters[0]) == 3


def test_duplicate_target_links_to_first_occurrence(make_record):
    first, second = make_record(1, full_name="first"), make_record(1, full_name="second")
    linker = make_record(2, link_id=1)
    result = build_clusters(RecordIndex.build([first, second, linker]))
    
    assert result.clusters == [(first, linker)]


def test_self_link_forms_single_member_cluster(make_record):
    lonely = make_record(1, link_id=1)
    result = build_clusters(RecordIndex.build([lonely]))
    
    assert result.clusters == [(lonely,)]
    assert result.length_histogram() == {1: 1}


def test_unlinked_and_dangling_records(make_record):
    unlinked = make_record(1)
    dangling = make_record(2, link_id=99)
    result = build_clusters(RecordIndex.build([unlinked, dangling]))
    
    assert result.clusters == []
    assert result.unlinked == [unlinked]
    assert result.dangling == [dangling]


def test_clustering_is_deterministic(make_record):
    records = [make_record(i, link_id=(i - 1 if i % 3 else None)) for i in range(1, 20)]
    first = build_clusters(RecordIndex.build(records))
    second = build_clusters(RecordIndex.build(records))
    
    assert first.clusters == second.clusters


def test_length_histogram(make_record):
    records = [
        make_record(1), make_record(2, link_id=1),
        make_record(3), make_record(4, link_id=3),
        make_record(5), make_record(6, link_id=5), make_record(7, link_id=5),
    ]
    result = build_clusters(RecordIndex.build(records))
    
    assert result.length_histogram() == {2: 2, 3: 1}


def test_disjoint_set_compresses_paths():
    forest = DisjointSet(4)
    forest.union(0, 1)
    forest.union(2, 3)
    forest.union(1, 3)
    
    root = forest.find(3)
    assert all(forest.find(i) == root for i in range(4))
    assert all(forest.parent[i] == root for i in range(4))
    assert forest.size[root] == 4
