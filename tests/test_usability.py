"""Tests for screening clusters before verification."""
import pytest
from geotest.core.models import UsabilityVerdict as V
from geotest.core.usability import MapResolver, UsabilityClassifier
from conftest import FakeEngine


@pytest.fixture
def classifier(engine):
    return UsabilityClassifier(MapResolver(engine))


def test_single_member_is_too_short(classifier, make_record):
    """Size is checked before anything else, even with no script variant."""
    assert classifier.classify((make_record(1, link_id=1),)) is V.TOO_SHORT
    assert classifier.classify((make_record(1, name_type="NS", translit="BGN"),)) is V.TOO_SHORT


def test_no_script_variant(classifier, make_record):
    cluster = (make_record(1), make_record(2, link_id=1, translit="BGN"))
    assert classifier.classify(cluster) is V.NO_SCRIPT_VARIANT


def test_no_translit_variant(classifier, make_record):
    cluster = (make_record(1, name_type="NS"), make_record(2, link_id=1))
    assert classifier.classify(cluster) is V.NO_TRANSLIT_VARIANT


def test_no_translit_checked_before_multiple_scripts(classifier, make_record):
    cluster = (make_record(1, name_type="NS"), make_record(2, name_type="DS"), make_record(3))
    assert classifier.classify(cluster) is V.NO_TRANSLIT_VARIANT


def test_multiple_script_variants_are_never_usable(classifier, make_record):
    cluster = (
        make_record(1, name_type="NS"),
        make_record(2, name_type="VS"),
        make_record(3, link_id=1, translit="BGN"),
    )
    assert classifier.classify(cluster) is V.MULTIPLE_SCRIPT_VARIANTS


def test_unsupported_map(classifier, make_record):
    cluster = (make_record(1, name_type="NS"), make_record(2, link_id=1, translit="XYZ"))
    assert classifier.classify(cluster) is V.UNSUPPORTED_MAP


def test_usable(classifier, moscow):
    assert classifier.classify(tuple(moscow)) is V.USABLE


def test_one_supported_system_is_enough(classifier, make_record):
    cluster = (
        make_record(1, name_type="DS"),
        make_record(2, link_id=1, translit="XYZ"),
        make_record(3, link_id=1, translit="BGN"),
    )
    assert classifier.classify(cluster) is V.USABLE


def test_rule_order(classifier):
    assert [verdict for verdict, _ in classifier.rules] == [
        V.TOO_SHORT,
        V.NO_SCRIPT_VARIANT,
        V.NO_TRANSLIT_VARIANT,
        V.MULTIPLE_SCRIPT_VARIANTS,
        V.UNSUPPORTED_MAP,
    ]


def test_custom_script_name_types(engine, make_record):
    classifier = UsabilityClassifier(MapResolver(engine), script_name_types={"X"})
    cluster = (make_record(1, name_type="NS"), make_record(2, link_id=1, translit="BGN"))
    
    assert classifier.classify(cluster) is V.NO_SCRIPT_VARIANT


def test_classification_is_deterministic(classifier, moscow):
    assert classifier.classify(tuple(moscow)) is classifier.classify(tuple(moscow))


def test_partition_lists_every_verdict(classifier, moscow, make_record):
    short = (make_record(9, link_id=9),)
    groups = classifier.partition([tuple(moscow), short])
    
    assert list(groups) == list(V)
    assert groups[V.USABLE] == [tuple(moscow)]
    assert groups[V.TOO_SHORT] == [short]


def test_resolver_caches_per_system_code(engine):
    resolver = MapResolver(engine)
    
    assert resolver.resolve("BGN") == "bgn-rus-Cyrl-Latn-1947"
    assert resolver.resolve("BGN") == "bgn-rus-Cyrl-Latn-1947"
    assert resolver.resolve("XYZ") is None
    assert resolver.resolve("XYZ") is None
    assert resolver.resolve("") is None
    assert engine.locate_calls == ["BGN", "XYZ"]


def test_resolver_treats_locator_failure_as_unsupported():
    class FailingEngine(FakeEngine):
        def locate(self, system_code):
            raise RuntimeError("locator crashed")
    
    resolver = MapResolver(FailingEngine({}, {}))
    assert resolver.resolve("BGN") is None
