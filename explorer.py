#!/usr/bin/env python3
"""Book Finder CLI - Open Library search and detail view."""
import argparse
import asyncio
import sys
import json
from tabulate import tabulate
from book_finder.client import OpenLibraryClient
from book_finder.async_client import AsyncOpenLibraryClient
from book_finder.config import Config
from book_finder.covers import LARGE
from book_finder.detail import DetailOrchestrator
from book_finder.models import SearchField
from book_finder.search import SearchOrchestrator, SearchState
import logging

logger = logging.getLogger(__name__)


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


def item_to_dict(item, detail=None):
    """JSON-ready view of an item and, if loaded, its detail."""
    data = {
        "key": item.key,
        "title": item.title,
        "authors": item.author_names,
        "first_publish_year": item.first_publish_year,
        "cover_url": item.cover_url(),
        "subjects": item.subjects,
        "isbns": item.isbns,
        "publishers": item.publishers,
        "publish_dates": item.publish_dates,
        "languages": item.languages,
        "number_of_pages_median": item.number_of_pages_median,
    }
    if detail is not None:
        data["detail"] = {
            "description": detail.description,
            "first_sentence": detail.first_sentence,
            "excerpt": detail.excerpt,
            "subjects": detail.subjects,
        }
    return data


def display_items(items, format_type: str):
    """Display result cards in specified format."""
    if format_type == "table":
        headers = ["#", "Title", "Authors", "First published", "Pages", "Subjects"]
        rows = [
            [
                i,
                _truncate(item.title, 50),
                _truncate(item.authors_str(2), 30),
                item.first_publish_year or "Unknown",
                item.number_of_pages_median or "N/A",
                _truncate(", ".join(item.subjects[:3]), 30),
            ]
            for i, item in enumerate(items, 1)
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([item_to_dict(item) for item in items], indent=2))

    elif format_type == "compact":
        for i, item in enumerate(items, 1):
            print(f"{i}. {item.title} - {item.authors_str(2)}")


def display_detail(item, detail, state: str, format_type: str):
    """Display the detail view: base fields always, enrichment when loaded."""
    if format_type == "json":
        print(json.dumps(item_to_dict(item, detail), indent=2))
        return

    rows = [
        ["Authors", item.authors_str(5)],
        ["First Published", item.first_publish_year or ""],
        ["Publishers", item.publishers_str()],
        ["Pages", item.number_of_pages_median or ""],
        ["Languages", item.languages_str()],
        ["ISBN", ", ".join(item.isbns[:3])],
        ["Subjects", ", ".join(item.subjects[:10])],
        ["Cover", item.cover_url(LARGE)],
        ["Open Library", item.open_library_url],
    ]
    print("\n" + item.title)
    print(tabulate([r for r in rows if r[1]], tablefmt="plain"))

    if detail is None:
        print(f"\n(details {state})")
        return

    for label, text in (
        ("Description", detail.description),
        ("First Sentence", detail.first_sentence),
        ("Excerpt", detail.excerpt),
    ):
        if text:
            print(f"\n{label}:\n{text}")


class BlockingClientAdapter:
    """Exposes the blocking client through the async interface the orchestrators use."""

    def __init__(self, client: OpenLibraryClient):
        self.client = client

    async def search(self, query, field):
        return self.client.search(query, field)

    async def fetch_detail(self, key):
        return self.client.fetch_detail(key)


async def run_search(args, client, notifier=None) -> int:
    """
    Run a search and optional detail view through the orchestrators.

    Returns:
        Process exit code
    """
    search = SearchOrchestrator(client, notifier)

    state = await search.submit(args.query, args.by)
    if state is SearchState.IDLE:
        logger.error("Search query is empty")
        return 1

    print(search.heading)
    if state is SearchState.FAILED:
        return 1

    display_items(search.items, args.format)

    if args.open is not None:
        if not 1 <= args.open <= len(search.items):
            logger.error(f"--open {args.open} is out of range (1-{len(search.items)})")
            return 1

        details = DetailOrchestrator(client)
        await details.open(search.items[args.open - 1])
        display_detail(details.item, details.detail, details.state.value, args.format)
        details.close()

    return 0


async def search_books_async(args, config: Config) -> int:
    """Search with the async client."""
    async with AsyncOpenLibraryClient(timeout=config.DEFAULT_TIMEOUT) as client:
        return await run_search(args, client)


def search_books_sync(args, config: Config) -> int:
    """Search with the blocking client, one request at a time."""
    with OpenLibraryClient(timeout=config.DEFAULT_TIMEOUT) as client:
        return asyncio.run(run_search(args, BlockingClientAdapter(client)))


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Book Finder - search the Open Library catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search by title
  %(prog)s search "the hobbit"

  # Search by author and open the third result
  %(prog)s search tolkien --by author --open 3

  # JSON output with the blocking client
  %(prog)s search dragons --by subject --format json --sync
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search for books")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--by", choices=[f.value for f in SearchField], default="title", help="Field to search (default: title)")
    search_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    search_parser.add_argument("--open", type=int, metavar="N", help="Show details for the Nth result")
    search_parser.add_argument("--sync", dest="use_sync", action="store_true", help="Use blocking client")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config()

    # Configure logging
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        if args.use_sync:
            code = search_books_sync(args, config)
        else:
            code = asyncio.run(search_books_async(args, config))

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
