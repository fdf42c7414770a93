# SPDX-License-Identifier: Apache-2.0
"""
Locale Translator - CLI Tool

Translates a tree of nested JSON localization files into one or more target
languages, mirroring the source directory for each language. Files are only
rewritten when their content changes.

Usage:
    translate-locales [options]

Examples:
    translate-locales                                   # locales/en -> locales/{de,id,ja}
    translate-locales -s i18n/en -o i18n -l fr,es       # Custom layout and languages
    translate-locales -u https://translate.example.com/translate --token SECRET
    translate-locales --backend deepl -l de,fr
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv

from locale_translator.pipeline.translation_pipeline import (
    PipelineConfig,
    RunSummary,
    TranslationPipeline,
)
from locale_translator.translators import (
    ConfigurationError,
    DeepLTranslator,
    LibreTranslateTranslator,
    get_google_translator,
)
from locale_translator.translators.base import TranslatorBackend

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DIR = "locales/en"
DEFAULT_OUTPUT_DIR = "locales"
DEFAULT_LANGS = "de,id,ja"
DEFAULT_CONCURRENCY = 10
DEFAULT_TIMEOUT = 30.0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (default: ``sys.argv[1:]``).

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="translate-locales",
        description="Translate nested JSON localization files into other languages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                      # locales/en -> locales/<lang>
  %(prog)s -s i18n/en -o i18n -l fr,es          # Custom directories and languages
  %(prog)s -c 4 --timeout 10 --retries 2        # Gentler on the server
  %(prog)s --backend deepl -l de,fr             # DeepL instead of LibreTranslate

Environment Variables:
  LIBRETRANSLATE_API_KEY   Bearer token for the translation server (or --token)
  DEEPL_API_KEY            DeepL API key (required for --backend deepl)
  DEEPL_API_URL            DeepL API URL (optional, for Pro users)
""",
    )

    # Layout options
    parser.add_argument(
        "-s",
        "--source",
        type=Path,
        default=Path(DEFAULT_SOURCE_DIR),
        help=f"Source locale directory (default: {DEFAULT_SOURCE_DIR})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help=f"Output root; files go to <output>/<lang>/ (default: {DEFAULT_OUTPUT_DIR})",
    )

    # Language options
    parser.add_argument(
        "-l",
        "--langs",
        default=DEFAULT_LANGS,
        help=f"Comma-separated target language codes (default: {DEFAULT_LANGS})",
    )
    parser.add_argument(
        "--source-lang",
        default="en",
        help="Source language code (default: en)",
    )

    # Translation backend
    parser.add_argument(
        "-b",
        "--backend",
        default="libretranslate",
        choices=["libretranslate", "deepl", "google"],
        help="Translation backend (default: libretranslate)",
    )
    parser.add_argument(
        "-u",
        "--url",
        default=LibreTranslateTranslator.DEFAULT_API_URL,
        help=f"Translation endpoint (default: {LibreTranslateTranslator.DEFAULT_API_URL})",
    )
    parser.add_argument(
        "--token",
        default="",
        help="Bearer token for the translation endpoint (or set LIBRETRANSLATE_API_KEY)",
    )

    # DeepL options
    deepl_group = parser.add_argument_group("DeepL options")
    deepl_group.add_argument(
        "--deepl-api-key",
        help="DeepL API key (or set DEEPL_API_KEY)",
    )
    deepl_group.add_argument(
        "--deepl-api-url",
        help="DeepL API URL (optional, for Pro users)",
    )

    # Request options
    req_group = parser.add_argument_group("Request options")
    req_group.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f"Maximum simultaneous translation requests (default: {DEFAULT_CONCURRENCY})",
    )
    req_group.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds, 0 to disable (default: {DEFAULT_TIMEOUT:g})",
    )
    req_group.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Retries per failed request before keeping the source text (default: 0)",
    )
    req_group.add_argument(
        "--retry-delay",
        type=float,
        default=1.0,
        help="Base delay in seconds between retries, doubled each time (default: 1.0)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any document failed",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def parse_langs(value: str) -> list[str]:
    """Split a comma-separated language list, dropping blanks."""
    return [lang.strip() for lang in value.split(",") if lang.strip()]


def create_translator(args: argparse.Namespace) -> TranslatorBackend:
    """Create translator based on backend selection.

    Args:
        args: Command line arguments.

    Returns:
        Translator instance.

    Raises:
        SystemExit: If the backend is unavailable or misconfigured.
    """
    timeout = args.timeout or None

    if args.backend == "deepl":
        api_key = args.deepl_api_key or os.environ.get("DEEPL_API_KEY", "")
        api_url = args.deepl_api_url or os.environ.get("DEEPL_API_URL")
        try:
            return DeepLTranslator(api_key=api_key, api_url=api_url, timeout=timeout)
        except ConfigurationError:
            print(
                "Error: DeepL API key is required for --backend deepl.\n"
                "  Set --deepl-api-key option or DEEPL_API_KEY environment variable.",
                file=sys.stderr,
            )
            sys.exit(1)

    elif args.backend == "google":
        try:
            GoogleTranslator = get_google_translator()
        except ImportError:
            print(
                "Error: Google backend requires 'google' extra.\n"
                "  Install with: pip install locale-translator[google]",
                file=sys.stderr,
            )
            sys.exit(1)
        translator: TranslatorBackend = GoogleTranslator()
        return translator

    else:
        token = args.token or os.environ.get("LIBRETRANSLATE_API_KEY", "")
        return LibreTranslateTranslator(api_url=args.url, api_key=token, timeout=timeout)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Build pipeline configuration from command line arguments."""
    return PipelineConfig(
        source_dir=args.source,
        output_dir=args.output,
        target_langs=parse_langs(args.langs),
        source_lang=args.source_lang,
        concurrency=args.concurrency,
        request_timeout=args.timeout or None,
        max_retries=args.retries,
        retry_delay=args.retry_delay,
    )


def print_summary(summary: RunSummary) -> None:
    """Print run statistics and per-document failures."""
    stats = summary.stats
    print()
    print(f"  Documents: {stats['documents']}")
    print(f"  Written: {stats['written']}")
    print(f"  Unchanged: {stats['unchanged']}")
    print(f"  Fallbacks: {stats['fallbacks']} of {stats['unique_strings']} strings")
    for report in summary.failed:
        if report.error is not None:
            print(f"Error: {report.path}: {report.error}", file=sys.stderr)
        for lang, error in report.failed.items():
            print(f"Error: {report.path} [{lang}]: {error}", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    """Execute translation pipeline.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    source_dir: Path = args.source
    if not source_dir.is_dir():
        print(f"Error: Source directory not found: {source_dir}", file=sys.stderr)
        return 1

    if args.concurrency < 1:
        print("Error: --concurrency must be at least 1", file=sys.stderr)
        return 1

    if args.retries < 0:
        print("Error: --retries must not be negative", file=sys.stderr)
        return 1

    config = build_config(args)
    translator = create_translator(args)
    pipeline = TranslationPipeline(translator, config)

    print(f"Source: {source_dir}")
    print(f"Output: {args.output}")
    print(f"Backend: {translator.name}")
    print(f"Languages: {args.source_lang} -> {', '.join(pipeline.target_langs)}")
    print()

    try:
        print("Translating...")
        summary = await pipeline.run()
    finally:
        await translator.close()

    print_summary(summary)
    print(f"Complete: translations saved to '{args.output}'")

    if args.strict and summary.failed:
        return 1
    return 0


def main() -> NoReturn:
    """Main entry point."""
    load_dotenv()
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
