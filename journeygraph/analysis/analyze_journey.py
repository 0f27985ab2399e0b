#!/usr/bin/env python3
"""CLI script to analyze a journey file.

Usage:
    journeygraph-analyze <journey.json>

    # JSON output, with day 2 collapsed in the sidebar
    journeygraph-analyze <journey.json> --json --collapse 2

    # write refreshed config.day hints to a new file
    journeygraph-analyze <journey.json> --write-hints journey.fixed.json
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from journeygraph.adapters.journey_ingest import apply_day_hints, graph_from_record
from journeygraph.analysis.journey_summary import JourneyAnalysis, analysis_to_dict, analyze_graph
from journeygraph.config import LayoutSettings
from journeygraph.errors import LayoutIncompleteError
from journeygraph.models import JourneyRecord


def load_journey_record(journey_file: Path) -> JourneyRecord:
    """Load a journey record from a JSON file.

    Accepts either the bare journey object or an envelope with a
    ``data`` key, as returned by the backend API.
    """
    with open(journey_file) as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    return JourneyRecord.model_validate(data)


def format_analysis(record: JourneyRecord, analysis: JourneyAnalysis) -> str:
    """Format a journey analysis for human-readable output."""
    lines = []
    lines.append("=" * 60)
    lines.append("JOURNEY ANALYSIS")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Journey:    {record.name or '(unnamed)'}")
    lines.append(f"ID:         {record.id or '-'}")
    lines.append(f"Node Count: {len(analysis.days)}")
    lines.append(f"Day Count:  {len(analysis.nodes_by_day)}")
    lines.append("")

    lines.append("-" * 40)
    lines.append("DAYS")
    lines.append("-" * 40)
    for day, node_ids in analysis.nodes_by_day.items():
        lines.append(f"  Day {day}:")
        for node_id in node_ids:
            position = analysis.layout[node_id]
            lines.append(f"    • {node_id} @ ({position.x:.0f}, {position.y:.0f})")
    if not analysis.nodes_by_day:
        lines.append("  (journey has no nodes)")
    lines.append("")

    if analysis.entry_nodes:
        lines.append("-" * 40)
        lines.append("DAY 1 ENTRY NODES")
        lines.append("-" * 40)
        for node_id in analysis.entry_nodes:
            lines.append(f"  • {node_id}")
        lines.append("")

    if analysis.markers.marker_nodes:
        lines.append("-" * 40)
        lines.append("DAY MARKERS")
        lines.append("-" * 40)
        for marker, edge in zip(analysis.markers.marker_nodes, analysis.markers.marker_edges):
            lines.append(f"  End of day {marker.day} after {edge.source_node_id}")
        lines.append("")

    lines.append("-" * 40)
    if analysis.stale_hints:
        lines.append(f"⚠ {len(analysis.stale_hints)} node(s) have a missing or stale day hint")
    else:
        lines.append("✓ All day hints are up to date")
    lines.append("-" * 40)
    lines.append("")

    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Infer journey days, plan a clean layout and list day markers."
    )
    parser.add_argument(
        "journey_file",
        type=Path,
        help="path to the journey JSON file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output the analysis as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--collapse",
        type=int,
        action="append",
        default=[],
        metavar="DAY",
        help="day collapsed in the sidebar (no marker is produced); repeatable",
    )
    parser.add_argument(
        "--write-hints",
        type=Path,
        metavar="OUT",
        help="write the journey with refreshed config.day hints to OUT",
    )

    args = parser.parse_args(argv)

    if not args.journey_file.exists():
        print(f"Error: journey file not found: {args.journey_file}", file=sys.stderr)
        return 1

    try:
        record = load_journey_record(args.journey_file)
        graph = graph_from_record(record)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Error: invalid journey file: {e}", file=sys.stderr)
        return 1

    try:
        analysis = analyze_graph(graph, args.collapse, LayoutSettings.from_env())
    except LayoutIncompleteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(analysis_to_dict(analysis), indent=2))
    else:
        print(format_analysis(record, analysis))

    if args.write_hints:
        updated, changed = apply_day_hints(record, analysis.days)
        args.write_hints.parent.mkdir(parents=True, exist_ok=True)
        with open(args.write_hints, "w") as f:
            json.dump(updated.to_payload(), f, indent=2)
        print(f"Wrote {args.write_hints} ({len(changed)} node(s) updated)", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
