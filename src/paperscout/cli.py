"""Command-line entry point."""

import argparse
import asyncio
import logging
import sys

from paperscout.config.settings import load_settings
from paperscout.core.exceptions import BrowserSessionError, ConfigurationError, PageProcessingError
from paperscout.output import write_html, write_json
from paperscout.pipeline.harvest import harvest
from paperscout.utils.logging import setup_logging

logger = logging.getLogger("paperscout")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        prog="paperscout",
        description="Harvest paper metadata from arXiv advanced search",
    )
    parser.add_argument("--topic", help="Search topic (matched in the title field by default)")
    parser.add_argument("--year", help="Submission year filter, e.g. 2024")
    parser.add_argument("--max-results", type=int, help="Maximum number of papers to process")
    parser.add_argument("--max-abstract-length", type=int, help="Truncate abstracts beyond this many characters")
    parser.add_argument("--subject", help="arXiv classification, e.g. computer_science")
    parser.add_argument("--json", dest="json_path", help="Write records and summary to this JSON file")
    parser.add_argument("--html", dest="html_path", help="Write an HTML report to this file")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--env-file", help="Load environment variables from this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one harvest; returns the process exit code."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        settings = load_settings(
            env_file=args.env_file,
            search={
                "topic": args.topic,
                "year": args.year,
                "max_results": args.max_results,
                "max_abstract_length": args.max_abstract_length,
                "subject": args.subject,
            },
            browser={"headless": False if args.headed else None},
            output={"json_path": args.json_path, "html_path": args.html_path},
        )
        records, summary = asyncio.run(harvest(settings))
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except BrowserSessionError as e:
        logger.error("Browser session failed: %s", e)
        return 1
    except PageProcessingError as e:
        logger.error("Search page could not be loaded: %s", e)
        return 1

    logger.info(summary.describe())
    for idx, record in enumerate(records, 1):
        logger.info("%d. %s [%s]", idx, record.title, record.identifier)

    if settings.output.json_path:
        write_json(records, summary, settings.output.json_path)
    if settings.output.html_path:
        write_html(records, summary, settings.output.html_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
