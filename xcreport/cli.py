"""CLI entry point for the result bundle report generator."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from xcreport.builder import build_render_tree
from xcreport.config import ReportOptions
from xcreport.embedding import LinkingEmbedding, embedding_for
from xcreport.models.report import RenderTree
from xcreport.pruning import prune_orphaned_attachments
from xcreport.readers.base import ResultReader
from xcreport.readers.loading import load_reader_manifest
from xcreport.serializers.html import render_html
from xcreport.serializers.json_report import render_json
from xcreport.serializers.junit import render_junit
from xcreport.snapshots import get_failing_snapshot_tests, write_failing_snapshot_tests

HTML_REPORT_NAME = "index.html"
JUNIT_REPORT_NAME = "report.junit"
JSON_REPORT_NAME = "report.json"

STATUS_SYMBOLS = {
    "success": "✓",
    "failure": "✗",
    "skip": "-",
}


def log_results_summary(log: logging.Logger, tree: RenderTree) -> None:
    """Log one line per run with its status and test counts."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for run in tree.runs:
        tests = run.all_tests
        log.info(
            "%s %s (%s): %d test(s), %d failed, %d skipped (%.2fs)",
            STATUS_SYMBOLS[run.status],
            run.name,
            run.destination.name,
            len(tests),
            sum(1 for t in tests if t.status == "failure"),
            sum(1 for t in tests if t.status == "skip"),
            run.duration,
        )


def write_report(path: Path, content: str, log: logging.Logger) -> None:
    """Write a report file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    log.info("Report written to %s", path)


async def run(
    result_paths: Sequence[Path],
    output_dir: Path,
    options: ReportOptions,
    reader_key: str = "xcresulttool",
    reader_config_json: str = "{}",
    *,
    junit: bool = False,
    export_json: bool = False,
    delete_unattached: bool = False,
    failed_snapshots_dir: Path | None = None,
) -> int:
    """Generate the reports and return exit code."""
    log = logging.getLogger("xcreport")

    log.info("Loading reader: %s", reader_key)
    manifest = load_reader_manifest(reader_key)
    config = manifest.config_cls(**json.loads(reader_config_json))
    readers: Sequence[ResultReader] = [
        manifest.reader_factory(config, path) for path in result_paths
    ]

    tree = await build_render_tree(
        readers, policy=options.unreadable_bundle_policy, log=log
    )
    if not tree.runs:
        log.error("No test runs found in %s", ", ".join(map(str, result_paths)))
        return 1

    log_results_summary(log, tree)

    embedding = embedding_for(options, output_dir)
    write_report(output_dir / HTML_REPORT_NAME, render_html(tree, embedding), log)

    if junit:
        write_report(
            output_dir / JUNIT_REPORT_NAME,
            render_junit(
                tree, include_run_destination_info=options.include_run_destination_info
            ),
            log,
        )

    if export_json:
        exports = [await f.reader.export_json() for f in tree.result_files]
        write_report(output_dir / JSON_REPORT_NAME, render_json(exports), log)

    if failed_snapshots_dir is not None:
        written = write_failing_snapshot_tests(
            get_failing_snapshot_tests(tree), failed_snapshots_dir
        )
        log.info("Wrote %d snapshot image(s) to %s", len(written), failed_snapshots_dir)

    if delete_unattached:
        referenced: Iterable[Path] = ()
        if isinstance(embedding, LinkingEmbedding):
            referenced = embedding.referenced_paths
        prune_orphaned_attachments(tree, referenced, log=log)

    return 0


def positive_float(value: str) -> float:
    """Parse a strictly positive float argument."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate HTML, JUnit and JSON reports from result bundles"
    )
    parser.add_argument(
        "-r",
        "--result-path",
        dest="result_paths",
        type=Path,
        action="append",
        required=True,
        help="Path to a result bundle (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (defaults to the first bundle's directory)",
    )
    parser.add_argument(
        "-i",
        "--inline",
        action="store_true",
        help="Embed attachments in the HTML report instead of linking them",
    )
    parser.add_argument(
        "-j", "--junit", action="store_true", help="Also write a JUnit report"
    )
    parser.add_argument(
        "--json", action="store_true", help="Also write a JSON export"
    )
    parser.add_argument(
        "-n",
        "--include-run-destination-info",
        action="store_true",
        help="Annotate JUnit suites with run destination details",
    )
    parser.add_argument(
        "-z",
        "--delete-unattached",
        action="store_true",
        help="Delete exported attachment files the report does not reference",
    )
    parser.add_argument(
        "-d",
        "--downsize-images",
        action="store_true",
        help="Downsize inlined images",
    )
    parser.add_argument(
        "--downsize-scale-factor",
        type=positive_float,
        default=0.5,
        help="Scale factor for downsized images (default: 0.5)",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Skip unreadable bundles instead of stopping at the first one",
    )
    parser.add_argument(
        "--reader",
        default="xcresulttool",
        help="Bundle reader key",
    )
    parser.add_argument(
        "--reader-config",
        default="{}",
        help="JSON configuration for the bundle reader",
    )
    parser.add_argument(
        "--failed-snapshots",
        type=Path,
        default=None,
        help="Directory for the reference, failure and difference images of failed "
        "snapshot tests",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    options = ReportOptions(
        rendering_mode="inline" if args.inline else "linking",
        downsize_images=args.downsize_images,
        downsize_scale_factor=args.downsize_scale_factor,
        include_run_destination_info=args.include_run_destination_info,
        unreadable_bundle_policy="skip" if args.skip_unreadable else "abort",
    )
    output_dir = args.output or args.result_paths[0].resolve().parent

    exit_code = asyncio.run(
        run(
            result_paths=args.result_paths,
            output_dir=output_dir,
            options=options,
            reader_key=args.reader,
            reader_config_json=args.reader_config,
            junit=args.junit,
            export_json=args.json,
            delete_unattached=args.delete_unattached,
            failed_snapshots_dir=args.failed_snapshots,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
