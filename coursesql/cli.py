"""
Command-Line Interface

Answers one course registration question and prints the result table.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from loguru import logger

from .config import Settings, make_client
from .errors import CourseQueryError, error_chain
from .pipeline import answer_question
from .schema import load_schema_descriptor


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-sql",
        description="Answer course registration questions from the course database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  course-sql "What CS courses are open for Fall 2024?"
  course-sql --db data/courses.sqlite3 -v "Who teaches CS 1331?"
        """
    )
    parser.add_argument(
        "question",
        help="Question to answer based on the course database"
    )
    parser.add_argument(
        "--db",
        default=settings.db_path,
        help=f"Path to SQLite database file, opened read-only (default: {settings.db_path})"
    )
    parser.add_argument(
        "--model",
        default=settings.model,
        help=f"Chat completion model (default: {settings.model})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the generated SQL to stderr before running it"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def print_error(exc: BaseException) -> None:
    message, *causes = error_chain(exc)
    print(f"Error: {message}", file=sys.stderr)
    if causes:
        print("\nCaused by:", file=sys.stderr)
        for i, cause in enumerate(causes):
            print(f"    {i}: {cause}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.verbose)

    try:
        schema = load_schema_descriptor(settings.schema_file)
        table = asyncio.run(answer_question(
            args.question,
            db_path=args.db,
            model=args.model,
            client=make_client(settings),
            verbose=args.verbose,
            schema=schema,
        ))
    except CourseQueryError as e:
        logger.debug(f"{e.stage} stage failed")
        print_error(e)
        return 1

    print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
