"""Batch scanning utility: run the risk scorer over a file of URLs / senders / messages."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional

from api.api import scan
from config import configure_logging, get_settings
from rules import RuleSet, load_rules

logger = logging.getLogger(__name__)

INPUT_FIELDS = ("url", "email", "sender_domain", "subject", "body")


def _normalize_input_format(path: Path, explicit: Optional[str]) -> str:
    if explicit:
        return explicit.lower()
    suffix = path.suffix.lower()
    if suffix in {".txt", ".list"}:
        return "txt"
    if suffix == ".jsonl":
        return "jsonl"
    return "csv"


def _normalize_output_format(path: Path, explicit: Optional[str]) -> str:
    if explicit:
        return explicit.lower()
    if path.suffix.lower() == ".csv":
        return "csv"
    return "jsonl"


def _entry_from_mapping(data: Dict) -> Optional[Dict]:
    entry = {}
    for name in INPUT_FIELDS:
        value = data.get(name) or data.get(name.upper())
        if value is not None and str(value).strip():
            entry[name] = str(value).strip()
    if not entry:
        return None
    label = data.get("label")
    if label is not None and str(label).strip() != "":
        entry["label"] = label
    return entry


def _read_txt(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            url = line.strip()
            if not url or url.startswith("#"):
                continue
            yield {"url": url}


def _read_csv(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            if not row:
                continue
            entry = _entry_from_mapping(row)
            if entry:
                yield entry


def _read_jsonl(path: Path) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw or raw.startswith("#"):
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Skipping malformed JSON on line %d of %s", lineno, path)
                continue
            if isinstance(data, str):
                data = {"url": data}
            if not isinstance(data, dict):
                logger.warning("Skipping non-object on line %d of %s", lineno, path)
                continue
            entry = _entry_from_mapping(data)
            if entry:
                yield entry


def _iter_inputs(path: Path, input_format: str) -> Iterator[Dict]:
    if input_format == "txt":
        return _read_txt(path)
    if input_format == "jsonl":
        return _read_jsonl(path)
    return _read_csv(path)


def _summarize_result(entry: Dict, verdict) -> Dict:
    summary = {
        "url": entry.get("url"),
        "email": entry.get("email") or entry.get("sender_domain"),
        "label": entry.get("label"),
    }
    summary.update(verdict.to_record())
    return summary


def _write_jsonl(rows: Iterable[Dict], path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        for row in rows:
            handle.write(json.dumps(row, ensure_ascii=False))
            handle.write("\n")


def _write_csv(rows: Iterable[Dict], path: Path) -> None:
    rows = list(rows)
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            row = {k: json.dumps(v, ensure_ascii=False) if isinstance(v, list) else v for k, v in row.items()}
            writer.writerow(row)


def run_collect(
    input_path: Path,
    output_path: Path,
    input_format: str,
    output_format: str,
    rules: Optional[RuleSet] = None,
) -> int:
    """Scan every entry of input_path and write one record per entry; returns the record count."""
    if rules is None:
        rules = get_settings().rules()
    outputs = []
    for entry in _iter_inputs(input_path, input_format):
        verdict = scan(
            url=entry.get("url"),
            email=entry.get("email"),
            subject=entry.get("subject"),
            body=entry.get("body"),
            sender_domain=entry.get("sender_domain"),
            rules=rules,
        )
        outputs.append(_summarize_result(entry, verdict))

    if output_format == "csv":
        _write_csv(outputs, output_path)
    else:
        _write_jsonl(outputs, output_path)

    dangerous = sum(1 for row in outputs if row["classification"] == "dangerous")
    logger.info("Scanned %d entries (%d dangerous) -> %s", len(outputs), dangerous, output_path)
    return len(outputs)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score a list of URLs, sender addresses or messages for phishing risk.")
    parser.add_argument("input", help="Path to input list (.txt, .csv, .jsonl)")
    parser.add_argument("output", help="Path to output file (.jsonl or .csv)")
    parser.add_argument(
        "--input-format",
        choices=["txt", "csv", "jsonl"],
        help="Override input format detection",
    )
    parser.add_argument(
        "--output-format",
        choices=["jsonl", "csv"],
        help="Override output format detection",
    )
    parser.add_argument("--rules", help="JSON file overriding the keyword, weight and threshold tables")
    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        sys.exit(1)

    input_format = _normalize_input_format(input_path, args.input_format)
    output_format = _normalize_output_format(output_path, args.output_format)

    try:
        rules = settings.rules()
        if args.rules:
            rules = load_rules(args.rules, base=rules)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    run_collect(input_path, output_path, input_format, output_format, rules)


if __name__ == "__main__":
    main()
