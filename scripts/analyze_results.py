#!/usr/bin/env python3
"""Build a ranking + analytics report snapshot from result JSON files.

Reads one or more result files (input-contract JSON, oldest first), writes
the report snapshot for the LAST file, and prints rank movement and trend
information when more than one file is given.

Usage:
    python scripts/analyze_results.py term1.json [term2.json ...] [--output report.json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for toolkit imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from result_toolkit.analytics import analyze_performance_trends
from result_toolkit.common import AnalysisThresholds
from result_toolkit.core.schemas import ValidationError
from result_toolkit.core.utils import load_result_json, save_report_json
from result_toolkit.ranking import compare_with_previous_result, find_consistent_performers
from result_toolkit.report import build_report

logger = logging.getLogger("analyze_results")


def main():
    parser = argparse.ArgumentParser(description="Rank and analyze student result files")
    parser.add_argument("results", nargs="+", type=Path, help="Result JSON files, oldest first")
    parser.add_argument("--output", "-o", type=Path, help="Where to write the report snapshot")
    parser.add_argument("--thresholds", "-t", type=Path, help="JSON file of threshold overrides")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        thresholds = AnalysisThresholds()
        if args.thresholds:
            with open(args.thresholds, "r", encoding="utf-8") as f:
                thresholds = AnalysisThresholds.from_dict(json.load(f))
        results = [load_result_json(path) for path in args.results]
    except (FileNotFoundError, ValidationError, ValueError) as e:
        logger.error("%s", e)
        return 1

    report = build_report(results[-1], thresholds=thresholds)
    insights = report.insights
    print(f"{report.title}: {report.summary.total_students} students, "
          f"class average {report.summary.class_average:.2f}% ({insights.class_performance})")
    for line in insights.key_insights:
        print(f"  - {line}")
    for line in insights.recommendations:
        print(f"  * {line}")

    if len(results) > 1:
        comparison = compare_with_previous_result(results[-1], results[-2])
        print(f"Since previous: {len(comparison.improved)} improved, "
              f"{len(comparison.declined)} declined, {len(comparison.maintained)} maintained")
        trend = analyze_performance_trends(results, thresholds=thresholds)
        print(f"Trend: {trend.trend} ({trend.average_change:+.2f}%)")
        for line in trend.insights:
            print(f"  - {line}")
        consistent = find_consistent_performers(results, thresholds=thresholds)
        print(f"Consistent performers: {', '.join(str(p.student_id) for p in consistent) or 'none'}")

    if args.output:
        save_report_json(report, args.output)
        print(f"Report written to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
