#!/usr/bin/env python3
"""CLI : calcule le planning (jour au plus tôt, chemin critique) d'un graphe JSON."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from core.exceptions import GraphContractViolation
from core.planning.graph_store import GraphStore
from core.planning.scheduler import Schedule, build_schedule

GRAPH_FILE_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "tasks": {"type": "array", "items": {"type": "integer"}},
        "dependencies": {
            "type": "object",
            "propertyNames": {"pattern": "^-?[0-9]+$"},
            "additionalProperties": {"type": "array", "items": {"type": "integer"}},
        },
    },
    "required": ["dependencies"],
    "additionalProperties": False,
}

EXIT_OK = 0
EXIT_INVALID = 2


def load_graph(path: Path) -> tuple[List[int], Dict[int, List[int]]]:
    """Lit et valide le fichier ; lève ValueError avec un message lisible."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"JSON invalide: {exc}") from exc

    errors = sorted(e.message for e in Draft202012Validator(GRAPH_FILE_SCHEMA).iter_errors(data))
    if errors:
        raise ValueError("; ".join(errors))

    store = GraphStore({int(k): v for k, v in data["dependencies"].items()})
    return list(data.get("tasks", [])), store.snapshot()


def render_text(schedule: Schedule) -> str:
    lines = []
    for task, day in schedule.earliest_start.items():
        mark = " *" if schedule.is_critical(task) else ""
        lines.append(f"{task}\tday {day}{mark}")
    length = "-" if schedule.length is None else str(schedule.length)
    lines.append(f"critical path length: {length}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="schedule_report",
        description="Earliest start day and critical path of a todo dependency graph.",
    )
    parser.add_argument("graph", type=Path, help='fichier {"tasks": [...], "dependencies": {...}}')
    parser.add_argument("--json", action="store_true", help="sortie JSON")
    args = parser.parse_args(argv)

    try:
        tasks, snapshot = load_graph(args.graph)
        schedule = build_schedule(snapshot, tasks)
    except ValueError as exc:
        print(f"KO: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except GraphContractViolation as exc:
        print(f"KO: {exc} ({exc.hint})", file=sys.stderr)
        return EXIT_INVALID

    if args.json:
        print(json.dumps(schedule.to_dict(), indent=2))
    else:
        print(render_text(schedule))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
