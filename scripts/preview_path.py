#!/usr/bin/env python3
"""
preview_path.py - Lay out a learning path from a content snapshot.

Loads a content snapshot exported from the content API, optionally grades one
lesson/exam attempt, then prints the gated learning path as a table (or writes
it as JSON for the client team to diff against).

Key features:
- Completion records from a JSON file, or embedded in the snapshot
- Optional grading of one attempt, fed back into the layout pass
- Engine settings from config/<name>.yaml (KADEME_CONFIG in .env)

Usage:
  python scripts/preview_path.py --snapshot data/snapshot.json
  python scripts/preview_path.py --snapshot data/snapshot.json --completions data/completions.json
  python scripts/preview_path.py --snapshot data/snapshot.json --grade exam_1 --answers data/answers.json
  python scripts/preview_path.py --snapshot data/snapshot.json --config compact --output path.json
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

import pandas as pd
from pydantic import TypeAdapter, ValidationError

from kademe.classroom import (
    active_item,
    grade_exam,
    grade_lesson,
    layout_path,
    collect_completions,
    unanswered_questions,
)
from kademe.schemas import CompletionRecord, ContentSnapshot, EngineConfig, PathItem
from kademe.utils import load_engine_config
from kademe.utils.config_loader import DEFAULT_CONFIG_NAME

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

TABLE_COLUMNS = ["order", "id", "kind", "step_class", "is_completed", "is_unlocked", "is_active", "top", "left"]


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------

def load_snapshot(path: Path) -> ContentSnapshot:
    """Load and validate a content snapshot JSON file."""
    return ContentSnapshot.model_validate_json(path.read_text(encoding="utf-8"))


def load_completions(path: Path) -> dict[str, CompletionRecord]:
    """Load a JSON list of completion records, keyed by subject ID."""
    records = TypeAdapter(list[CompletionRecord]).validate_json(path.read_text(encoding="utf-8"))
    return {record.subject_id: record for record in records}


def load_answers(path: Path) -> dict[str, str]:
    """Load a JSON object of question ID -> submitted answer."""
    return TypeAdapter(dict[str, str]).validate_json(path.read_text(encoding="utf-8"))


# -----------------------------------------------------------------------------
# Grading
# -----------------------------------------------------------------------------

def grade_attempt(
    snapshot: ContentSnapshot,
    subject_id: str,
    answers: dict[str, str],
    config: EngineConfig,
) -> Optional[CompletionRecord]:
    """
    Grade one lesson or exam attempt from the snapshot.

    Returns None if the subject is unknown or questions are unanswered.
    """
    default_passing = config.grading.default_passing_score
    for level in snapshot.levels:
        for unit in level.units:
            for lesson in unit.lessons:
                if lesson.id == subject_id:
                    missing = unanswered_questions(lesson.exercises, answers)
                    if missing:
                        logger.error(f"Unanswered exercises in {subject_id}: {', '.join(missing)}")
                        return None
                    record, _ = grade_lesson(lesson, answers, default_passing)
                    return record
            for exam in unit.exams:
                if exam.id == subject_id:
                    missing = unanswered_questions(exam.questions, answers)
                    if missing:
                        logger.error(f"Unanswered questions in {subject_id}: {', '.join(missing)}")
                        return None
                    record, _ = grade_exam(exam, answers, default_passing)
                    return record

    logger.error(f"No lesson or exam with id {subject_id} in snapshot")
    return None


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

def path_table(items: list[PathItem]) -> pd.DataFrame:
    """Flatten path items into a display table."""
    rows = []
    for item in items:
        row = item.model_dump(mode="json", exclude={"position", "metadata"})
        row["top"] = item.position.top
        row["left"] = item.position.left
        rows.append(row)
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Lay out the gated learning path for a content snapshot",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        required=True,
        help="Path to content snapshot JSON"
    )
    parser.add_argument(
        "--completions",
        type=Path,
        default=None,
        help="Path to completion records JSON (default: records embedded in snapshot)"
    )
    parser.add_argument(
        "--grade",
        default=None,
        help="Lesson or exam ID to grade before layout"
    )
    parser.add_argument(
        "--answers",
        type=Path,
        default=None,
        help="Path to answers JSON (question ID -> answer), used with --grade"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Engine config name in config/ (default: $KADEME_CONFIG or 'default')"
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding engine configs"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write path items as JSON instead of printing a table"
    )

    args = parser.parse_args(argv)

    if args.grade and not args.answers:
        parser.error("--grade requires --answers")

    config_name = args.config or os.environ.get("KADEME_CONFIG", DEFAULT_CONFIG_NAME)
    try:
        config = load_engine_config(config_name, args.config_dir)
        snapshot = load_snapshot(args.snapshot)
        if args.completions:
            completions = load_completions(args.completions)
        else:
            completions = collect_completions(snapshot.levels)
        answers = load_answers(args.answers) if args.answers else {}
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to load inputs: {e}")
        return 1

    logger.info(f"Loaded snapshot: {len(snapshot.levels)} levels, {len(completions)} completion records")
    logger.info(f"  Config: {config_name}")

    if args.grade:
        record = grade_attempt(snapshot, args.grade, answers, config)
        if record is None:
            return 1
        completions[record.subject_id] = record

    items = layout_path(snapshot.levels, completions, config)
    current = active_item(items)
    logger.info(f"Path items: {len(items)}")
    logger.info(f"  Active: {current.id if current else 'none'}")

    if args.output:
        payload = [item.model_dump(mode="json") for item in items]
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved path to {args.output}")
    else:
        print(path_table(items).to_string(index=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
