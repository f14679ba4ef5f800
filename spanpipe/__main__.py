from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from . import __version__
from .analyzer import Analyzer
from .backend_registry import create_backend, get_backend_choices, list_backends
from .config import AnalyzerConfig
from .doc import AnalysedText
from .errors import SpanPipeError
from .language_utils import language_display_name
from .tag_registry import TagSetRegistry

TASK_CHOICES = ("analyse", "analyze", "backends", "tagsets")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spanpipe",
        description="Align annotation pipeline output into sentences, tokens and named entity chunks",
    )
    parser.add_argument("-V", "--version", action="version", version=f"spanpipe {__version__}")

    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="task", required=False)

    # analyse -----------------------------------------------------------------
    analyse_parser = subparsers.add_parser(
        "analyse",
        aliases=["analyze"],
        help="Run a backend on a text and print the aligned analysis",
        parents=[parent_parser],
    )
    analyse_parser.add_argument("--input", default=None, help="Input text file (default: read STDIN)")
    analyse_parser.add_argument("--output", default=None, help="Output file (omit to write to stdout)")
    analyse_parser.add_argument(
        "--backend",
        choices=get_backend_choices(),
        required=True,
        help="Backend producing the token annotations",
    )
    analyse_parser.add_argument("--language", required=True, help="Language code of the text (e.g., 'en', 'de')")
    analyse_parser.add_argument(
        "--model",
        default=None,
        help="Model name (e.g., 'en_core_web_sm' for SpaCy, 'de_gsd' for Stanza)",
    )
    analyse_parser.add_argument("--endpoint-url", default=None, help="REST backend endpoint URL (CoreNLP server)")
    analyse_parser.add_argument(
        "--download-model",
        action="store_true",
        help="Download the backend model if it is not installed",
    )
    analyse_parser.add_argument("--format", choices=["json", "table"], default="json", help="Output format")
    analyse_parser.add_argument("--timeout", type=float, default=None, help="Seconds to wait for the backend")
    analyse_parser.add_argument("--workers", type=int, default=None, help="Worker threads running the backend")
    analyse_parser.add_argument("--tagsets", type=Path, default=None, help="JSON file with additional tag sets")

    # backends ----------------------------------------------------------------
    subparsers.add_parser("backends", help="List available backends", parents=[parent_parser])

    # tagsets -----------------------------------------------------------------
    tagsets_parser = subparsers.add_parser(
        "tagsets",
        help="List canonical POS and NER tag sets",
        parents=[parent_parser],
    )
    tagsets_parser.add_argument("--language", default=None, help="Show the tags of one language")
    tagsets_parser.add_argument("--tagsets", type=Path, default=None, help="JSON file with additional tag sets")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_input(path: Optional[str]) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return sys.stdin.read()


def _write_output(content: str, path: Optional[str]) -> None:
    if path:
        Path(path).write_text(content, encoding="utf-8")
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")


def format_table(at: AnalysedText) -> str:
    """Render tokens (one row each) followed by the NER chunks."""
    rows = []
    for sent_idx, sentence in enumerate(at.sentences, start=1):
        for token in at.tokens_in(sentence):
            rows.append([
                sent_idx,
                f"{token.start}-{token.end}",
                token.text,
                token.pos.tag if token.pos else "",
                (token.pos.upos or "") if token.pos else "",
                token.morpho.lemma if token.morpho else "",
            ])
    parts = [tabulate(rows, headers=["Sent", "Span", "Token", "POS", "UPOS", "Lemma"])]
    if at.chunks:
        chunk_rows = [
            [f"{chunk.start}-{chunk.end}", at.span_text(chunk), chunk.ner.tag, chunk.ner.category or ""]
            for chunk in at.chunks
        ]
        parts.append(tabulate(chunk_rows, headers=["Span", "Chunk", "NER", "Category"]))
    return "\n\n".join(parts)


def run_analyse(args: argparse.Namespace) -> int:
    text = _read_input(args.input)
    config = AnalyzerConfig.from_env(
        max_workers=args.workers,
        timeout=args.timeout,
        tagsets_file=args.tagsets,
    )
    pipeline = create_backend(
        args.backend,
        language=args.language,
        model_name=args.model,
        url=args.endpoint_url,
        download_model=args.download_model,
        verbose=args.verbose,
    )
    with Analyzer(config) as analyzer:
        analyzer.set_pipeline(args.language, pipeline)
        at = analyzer.analyse(args.language, text)
    if args.format == "table":
        content = format_table(at)
    else:
        content = json.dumps(at.to_dict(), ensure_ascii=False, indent=2)
    _write_output(content, args.output)
    return 0


def run_backends(args: argparse.Namespace) -> int:
    rows = [
        [name, spec.description, "yes" if spec.is_rest else "no", spec.url or ""]
        for name, spec in sorted(list_backends().items())
    ]
    print(tabulate(rows, headers=["Backend", "Description", "REST", "URL"]))
    return 0


def run_tagsets(args: argparse.Namespace) -> int:
    registry = TagSetRegistry.default()
    if args.tagsets:
        registry.load_tagsets(args.tagsets)
    if args.language:
        language = args.language.lower()
        rows = []
        for kind, tagset in (("pos", registry.get_pos_tagset(language)), ("ner", registry.get_ner_tagset(language))):
            if tagset is None:
                continue
            for tag in tagset:
                category = tag.upos if kind == "pos" else tag.category
                rows.append([kind, tagset.name, tag.tag, category or ""])
        if not rows:
            print(f"[spanpipe] No canonical tag sets for language '{language}'", file=sys.stderr)
            return 1
        print(f"{language_display_name(language)} ({language})")
        print(tabulate(rows, headers=["Kind", "Tag set", "Tag", "Category"]))
        return 0

    rows = []
    for kind in ("pos", "ner"):
        for language, tagset in sorted(registry.tagsets(kind).items()):
            rows.append([language, language_display_name(language), kind, tagset.name, len(tagset)])
    print(tabulate(rows, headers=["Language", "Name", "Kind", "Tag set", "Tags"]))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.task:
        parser.error("No task specified. Use one of: " + ", ".join(TASK_CHOICES))
    _configure_logging(getattr(args, "verbose", False))

    try:
        if args.task in ("analyse", "analyze"):
            return run_analyse(args)
        if args.task == "backends":
            return run_backends(args)
        if args.task == "tagsets":
            return run_tagsets(args)
    except (SpanPipeError, RuntimeError, ValueError, OSError) as exc:
        message = str(exc)
        if not message.startswith("[spanpipe]"):
            message = f"[spanpipe] {message}"
        print(message, file=sys.stderr)
        return 1

    parser.error(f"Unknown task '{args.task}'. Supported tasks: {', '.join(TASK_CHOICES)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
