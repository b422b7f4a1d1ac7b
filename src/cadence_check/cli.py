"""CLI entry point for the ``cadence`` prose risk checker.

Usage examples::

    # Check files by name
    cadence draft.md notes/*.txt

    # Check inline text
    cadence "This is some test text"

    # Check from stdin
    cat essay.txt | cadence -

    # Machine-readable JSON output
    cadence -j report.md

    # Verbose: show sub-scores and individual suggestions
    cadence -v draft.md

    # Bias rhythm scoring toward your own writing
    cadence --style-sample my_blog_post.md draft.md

    # Accept every suggestion in order and print the rewritten text
    cadence --rewrite draft.md

    # Exit 1 if any input reaches an overall risk of 65 or more
    cadence -t 65 docs/*.md
"""


import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO, TypeAlias

from .analysis import HYPERPARAMETERS, Hyperparameters, Suggestion, SuggestionStatus
from .errors import InputValidationError, StaleSpanError
from .reconcile import apply_suggestion
from .rules import Pipeline
from .server import _analyze
from .version import PACKAGE_VERSION

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_THRESHOLD_FAILURE = 1
EXIT_ERROR = 2

# ---------------------------------------------------------------------------
# Band decorations for terminal output
# ---------------------------------------------------------------------------

_BAND_SYMBOLS: dict[str, str] = {
    "low": ".",
    "moderate": "!",
    "high": "!!",
}

_METRIC_LABELS: dict[str, str] = {
    "perplexity": "perplexity",
    "burstiness": "burstiness",
    "sentencePatternDiversity": "sentence patterns",
    "vocabularyPredictability": "vocabulary",
}

InputValue: TypeAlias = str | Path


@dataclass(frozen=True)
class InputTarget:
    """Typed representation of a CLI input target."""

    kind: Literal["file", "stdin", "text"]
    value: InputValue
    label: str


def _format_score_line(label: str, result: dict) -> str:
    """Build a one-line summary for a single analyzed input."""
    risk = result["metrics"]["overallRisk"]
    band = result["riskBands"]["overallRisk"]
    wc = result["insights"]["wordCount"]
    count = len(result["suggestions"])
    sym = _BAND_SYMBOLS.get(band, "?")
    return f"{label}: {risk}/100 risk [{band}] ({wc} words, {count} suggestions) {sym}"


def _print_metrics(result: dict, file: TextIO = sys.stdout) -> None:
    """Print the four sub-scores with their bands."""
    for key, name in _METRIC_LABELS.items():
        print(
            f"  {name}: {result['metrics'][key]} [{result['riskBands'][key]}]",
            file=file,
        )
    note = result["insights"].get("note")
    if note:
        print(f"  note: {note}", file=file)


def _print_suggestions(result: dict, file: TextIO = sys.stdout) -> None:
    """Print each suggestion with its span and proposed text."""
    for s in result["suggestions"]:
        print(f"  {s['id']} {s['type']} [{s['start']}:{s['end']}] +{s['riskImpact']}", file=file)
        print(f"    - {s['original']}", file=file)
        print(f"    + {s['replacement']}", file=file)


# ---------------------------------------------------------------------------
# Core analysis dispatch
# ---------------------------------------------------------------------------


def _rewrite(text: str, payloads: list[dict]) -> tuple[str, int]:
    """Accept every suggestion in generation order, skipping stale ones."""
    records = [Suggestion.from_payload(raw) for raw in payloads]
    applied = 0
    for suggestion_id in [record.id for record in records]:
        current = next(record for record in records if record.id == suggestion_id)
        if current.status is not SuggestionStatus.PENDING:
            continue
        try:
            text, records = apply_suggestion(text, records, suggestion_id)
        except StaleSpanError as exc:
            logger.warning("skipping %s: %s", suggestion_id, exc)
            continue
        applied += 1
    return text, applied


def _analyze_text(
    text: str,
    label: str,
    style_sample: str | None,
    hyperparameters: Hyperparameters,
    pipeline: Pipeline,
    *,
    rewrite: bool = False,
) -> dict:
    """Run analysis and attach the source label."""
    result = _analyze(text, style_sample, hyperparameters, pipeline=pipeline)
    result["source"] = label
    if rewrite:
        result["rewritten"], result["applied"] = _rewrite(text, result["suggestions"])
    return result


def _analyze_file(
    path: Path,
    style_sample: str | None,
    hyperparameters: Hyperparameters,
    pipeline: Pipeline,
    *,
    rewrite: bool = False,
) -> dict:
    """Read a file and analyze its contents."""
    text = path.read_text(encoding="utf-8")
    return _analyze_text(
        text, str(path), style_sample, hyperparameters, pipeline, rewrite=rewrite
    )


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="cadence",
        description="Score prose for detector-associated style patterns.",
        epilog="Pass file paths, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Inputs to check: files, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=PACKAGE_VERSION,
        help="Show package version and exit.",
    )
    p.add_argument(
        "-j", "--json",
        action="store_true",
        default=False,
        help="Output results as JSON.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show sub-scores and individual suggestions.",
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Only print sources that fail the threshold.",
    )
    p.add_argument(
        "-t", "--threshold",
        type=int,
        default=0,
        metavar="RISK",
        help="Maximum passing risk (1-100). Exit 1 if any input reaches it.",
    )
    p.add_argument(
        "-c", "--config",
        default=None,
        metavar="JSONL",
        help="Path to JSONL rule configuration. Defaults to packaged settings.",
    )
    p.add_argument(
        "-s", "--score-only",
        action="store_true",
        default=False,
        help="Print overall risk only.",
    )
    p.add_argument(
        "--style-sample",
        default=None,
        metavar="FILE",
        help="Sample of your own writing used as a rhythm baseline.",
    )
    p.add_argument(
        "--rewrite",
        action="store_true",
        default=False,
        help="Accept all suggestions in order and print the rewritten text.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log rule and reconciliation details to stderr.",
    )
    return p


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def _is_inline_text_argument(value: str) -> bool:
    """Return whether a positional argument should be treated as inline text."""
    return any(ch.isspace() for ch in value)


def _resolve_inputs(args: argparse.Namespace) -> list[InputTarget]:
    """Resolve positional args into typed input targets."""
    inputs: list[InputTarget] = []
    for index, raw in enumerate(args.inputs, start=1):
        if raw == "-":
            inputs.append(InputTarget(kind="stdin", value=raw, label="<stdin>"))
            continue
        candidate_path = Path(raw)
        if candidate_path.is_file():
            inputs.append(
                InputTarget(kind="file", value=candidate_path, label=str(candidate_path))
            )
            continue
        if _is_inline_text_argument(raw):
            inputs.append(InputTarget(kind="text", value=raw, label=f"<text:{index}>"))
            continue
        inputs.append(InputTarget(kind="file", value=candidate_path, label=str(candidate_path)))
    return inputs


def _fails_threshold(result: dict, threshold: int) -> bool:
    return threshold > 0 and result["metrics"]["overallRisk"] >= threshold


def _emit_result(result: dict, args: argparse.Namespace) -> None:
    """Print one analyzed result immediately."""
    if args.quiet and not _fails_threshold(result, args.threshold):
        return
    if args.score_only:
        print(result["metrics"]["overallRisk"], flush=True)
        return

    print(_format_score_line(result["source"], result), flush=True)
    if args.verbose:
        _print_metrics(result)
        if result["suggestions"]:
            _print_suggestions(result)
    if "rewritten" in result:
        print(result["rewritten"], flush=True)


def cli_main(argv: list[str] | None = None) -> int:
    """Entry point for the ``cadence`` command.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Exit code suitable for ``sys.exit``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    style_sample: str | None = None
    if args.style_sample is not None:
        try:
            style_sample = Path(args.style_sample).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"cadence: {args.style_sample}: {exc}", file=sys.stderr)
            return EXIT_ERROR

    inputs = _resolve_inputs(args)

    results: list[dict] = []
    threshold_failed = False
    hp = HYPERPARAMETERS
    pipeline = Pipeline.from_jsonl(args.config)

    for target in inputs:
        try:
            if target.kind == "stdin":
                text = sys.stdin.read()
                result = _analyze_text(
                    text, target.label, style_sample, hp, pipeline, rewrite=args.rewrite
                )
            elif target.kind == "text":
                assert isinstance(target.value, str)
                result = _analyze_text(
                    target.value,
                    target.label,
                    style_sample,
                    hp,
                    pipeline,
                    rewrite=args.rewrite,
                )
            else:
                assert isinstance(target.value, Path)
                path = target.value
                if not path.is_file():
                    print(f"cadence: {path}: No such file", file=sys.stderr)
                    continue
                try:
                    result = _analyze_file(
                        path, style_sample, hp, pipeline, rewrite=args.rewrite
                    )
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"cadence: {path}: {exc}", file=sys.stderr)
                    continue
        except InputValidationError as exc:
            print(f"cadence: {target.label}: {exc}", file=sys.stderr)
            continue

        results.append(result)
        if _fails_threshold(result, args.threshold):
            threshold_failed = True

        if not args.json:
            _emit_result(result, args)

    if not results:
        return EXIT_ERROR

    # --- Output ---
    if args.json:
        out = results if len(results) > 1 else results[0]
        json.dump(out, sys.stdout, indent=2)
        sys.stdout.write("\n")

    # --- Exit code ---
    if threshold_failed:
        return EXIT_THRESHOLD_FAILURE

    return EXIT_OK


def main() -> None:
    """Thin wrapper that calls ``sys.exit`` with the CLI return code."""
    sys.exit(cli_main())
