"""Human-readable summary of a GeoTest run."""
from typing import TextIO

from geotest.core.models import UsabilityVerdict
from geotest.core.pipeline import GeoTestReport

USABILITY_LINES = [
    (UsabilityVerdict.TOO_SHORT, "clusters are too short"),
    (UsabilityVerdict.NO_SCRIPT_VARIANT, "clusters contain no original-script entries"),
    (UsabilityVerdict.NO_TRANSLIT_VARIANT, "clusters contain no transliteration info"),
    (UsabilityVerdict.MULTIPLE_SCRIPT_VARIANTS, "clusters contain more than 1 original-script entry"),
    (UsabilityVerdict.UNSUPPORTED_MAP, "clusters are transliterated with a system that has no map"),
]


def render_uniqueness(report: GeoTestReport, out: TextIO):
    count = len(report.index.duplicate_name_ids())
    print(f"{count} records have a non-unique name_id (should be 0)", file=out)
    print(file=out)


def render_clusters(report: GeoTestReport, out: TextIO):
    clusters = report.clusters
    print(f"{clusters.member_count} linked records form {len(clusters.clusters)} unique clusters", file=out)
    print(f"{len(clusters.unlinked)} records have no link, {len(clusters.dangling)} link to an unknown name_id", file=out)
    histogram = ", ".join(f"{length}: {count}" for length, count in clusters.length_histogram().items())
    print(f"Cluster length to number of clusters: {{{histogram}}}", file=out)
    print(file=out)


def render_translit_systems(report: GeoTestReport, out: TextIO):
    index = report.index
    print("Transliteration systems used:", file=out)
    for code, names in index.by_translit_system.items():
        paired = sum(1 for name in names if index.related(name) is not None)
        line = f"- {code!r} * {len(names)} ({paired} with a pair)"
        map_id = report.resolver.resolve(code)
        if map_id:
            line += f" implemented as {map_id}"
        print(line, file=out)
    print(file=out)


def render_usability(report: GeoTestReport, out: TextIO):
    print("Among the unique clusters:", file=out)
    for verdict, text in USABILITY_LINES:
        print(f"- {len(report.usability[verdict])} {text}", file=out)
    print(f"Remaining {len(report.usable)} clusters seem to be usable", file=out)
    print(file=out)


def render_accuracy(report: GeoTestReport, out: TextIO, verbose: bool = False):
    verification = report.verification
    for code, tally in verification.tallies.items():
        line = f"{code}: {tally.ok}/{tally.total} ({tally.accuracy:.2f}%)"
        if tally.errors:
            line += " (Errors: " + ", ".join(f"{kind} * {n}" for kind, n in tally.errors.items()) + ")"
        print(line, file=out)
        
        if verbose:
            for comparison in verification.pairs:
                if comparison.ok or comparison.variant.translit_system_code != code:
                    continue
                kind = comparison.result.value if comparison.result is not None else UsabilityVerdict.UNSUPPORTED_MAP.value
                print(
                    f"    {kind}: {comparison.original.full_name!r} -> "
                    f"{comparison.attempted_text!r}, expected {comparison.variant.full_name!r} "
                    f"(name_id {comparison.variant.name_id})",
                    file=out,
                )


def render_summary(report: GeoTestReport, out: TextIO, verbose: bool = False):
    """Write every summary section to `out`."""
    render_uniqueness(report, out)
    render_clusters(report, out)
    render_translit_systems(report, out)
    render_usability(report, out)
    render_accuracy(report, out, verbose=verbose)
