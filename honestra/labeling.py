"""
Guard Log Labeling — interactive annotation of logged guard calls

Annotators grade each logged model reply on two scales:

  teleology_level
    0 = none         purely causal / descriptive
    1 = compression  purpose language that is grounded and harmless
    2 = fiction      anthropomorphism, fate, punishment by system/universe

  adequacy_level
    0 = inadequate   confabulatory, wrong cause, magic presented as fact
    1 = partial      roughly right, but vague or incomplete
    2 = adequate     causal, grounded in mechanism/policy/data

Each entry is shown with the logged guard result next to a fresh replay
through the current catalog, so drift between catalog versions is visible.
Labeled and skipped entries are appended to the output file; entries
already present there are not shown again.

Usage:
    honestra-label
    honestra-label --input logs/honestra_log.jsonl --output logs/honestra_labeled.jsonl
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from honestra.catalog import CATALOG_VERSION
from honestra.guard import GuardPayload, guard
from honestra.guard_log import append_entry, entry_key, read_entries

logger = logging.getLogger(__name__)

DEFAULT_INPUT = Path("logs") / "honestra_log.jsonl"
DEFAULT_OUTPUT = Path("logs") / "honestra_labeled.jsonl"

LEVELS = ("0", "1", "2")
QUIT = "q"
SKIP = "s"

Ask = Callable[[str], str]
Out = Callable[[str], None]


@dataclass
class SessionStats:
    processed: int = 0
    labeled: int = 0
    skipped: int = 0
    already_labeled: int = 0


def load_labeled_keys(path: Union[str, Path]) -> set[str]:
    return {entry_key(e) for e in read_entries(path)}


def format_entry(entry: dict, index: int, replay: GuardPayload) -> str:
    logged = entry.get("honestra") or {}
    lines = [
        "=" * 80,
        f"Entry #{index}",
        "=" * 80,
        "",
        "USER MESSAGE:",
        str(entry.get("userMessage") or ""),
        "",
        "MODEL REPLY:",
        str(entry.get("modelReply") or ""),
        "",
        "Honestra (logged):",
        f"  Has Teleology: {logged.get('hasTeleology')}",
        f"  Score: {logged.get('teleologyScore')}",
        f"  Severity: {logged.get('severity')}",
    ]
    for reason in logged.get("reasons") or []:
        lines.append(f"    - {reason}")

    lines += [
        "",
        f"Honestra (replay, catalog {CATALOG_VERSION}):",
        f"  Has Teleology: {replay.has_teleology}",
        f"  Severity: {replay.severity}",
    ]
    for category in replay.categories:
        lines.append(f"    - {category}")
    if sorted(logged.get("reasons") or []) != sorted(replay.categories):
        lines.append("  (replay differs from logged result)")
    lines.append("")
    return "\n".join(lines)


def _ask(ask: Ask, question: str) -> str:
    try:
        return ask(question).strip()
    except EOFError:
        return QUIT


def ask_level(
    ask: Ask,
    out: Out,
    question: str,
    allow_skip: bool = False,
) -> Union[int, str]:
    """Prompt until a valid answer: 0/1/2, or 's'/'q' when skipping is allowed."""
    valid = LEVELS + ((SKIP, QUIT) if allow_skip else ())
    while True:
        answer = _ask(ask, question)
        if answer in LEVELS:
            return int(answer)
        if answer in valid or answer == QUIT:
            return answer
        out(f"Invalid input. Please enter {', '.join(valid)}.")


def _ask_note(ask: Ask, question: str) -> Optional[str]:
    note = _ask(ask, question)
    return note if note and note != QUIT else None


def label_entries(
    input_path: Union[str, Path] = DEFAULT_INPUT,
    output_path: Union[str, Path] = DEFAULT_OUTPUT,
    ask: Optional[Ask] = None,
    out: Optional[Out] = None,
) -> SessionStats:
    """Run one labeling session. Returns counts for the summary."""
    ask = ask or input
    out = out or print
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    labeled_keys = load_labeled_keys(output_path)
    out(f"Found {len(labeled_keys)} previously labeled entries.")

    stats = SessionStats()
    for entry in read_entries(input_path):
        stats.processed += 1
        key = entry_key(entry)
        if key in labeled_keys:
            stats.already_labeled += 1
            continue

        replay = guard(str(entry.get("modelReply") or ""))
        out(format_entry(entry, stats.processed, replay))

        teleology = ask_level(
            ask, out,
            "Teleology level? (0 = none, 1 = compression, 2 = fiction, s = skip, q = quit): ",
            allow_skip=True,
        )
        if teleology == QUIT:
            out("Quitting.")
            break
        if teleology == SKIP:
            append_entry(output_path, {**entry, "skip": True})
            labeled_keys.add(key)
            stats.skipped += 1
            continue
        teleology_note = _ask_note(ask, "Optional teleology note? (Enter to skip): ")

        adequacy = ask_level(
            ask, out, "Adequacy level? (0 = inadequate, 1 = partial, 2 = adequate): ",
        )
        if adequacy == QUIT:
            out("Quitting.")
            break
        adequacy_note = _ask_note(ask, "Optional adequacy note? (Enter to skip): ")

        labeled = {**entry, "teleology_level": teleology, "adequacy_level": adequacy}
        if teleology_note:
            labeled["teleology_note"] = teleology_note
        if adequacy_note:
            labeled["adequacy_note"] = adequacy_note

        append_entry(output_path, labeled)
        labeled_keys.add(key)
        stats.labeled += 1

    return stats


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Honestra guard log labeling tool")
    parser.add_argument(
        "--input",
        default=str(DEFAULT_INPUT),
        help=f"Guard log to label (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT),
        help=f"Labeled output file (default: {DEFAULT_OUTPUT})",
    )
    args = parser.parse_args(argv)

    try:
        stats = label_entries(args.input, args.output)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print(f"Total entries processed: {stats.processed}")
    print(f"Already labeled: {stats.already_labeled}")
    print(f"Newly labeled: {stats.labeled}")
    print(f"Skipped: {stats.skipped}")
    print(f"Output file: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
