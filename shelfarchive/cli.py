"""
Command-line interface for Shelf Archive.

Read-only views over an archive file, plus link resolution and catalog
reconciliation.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from loguru import logger

from shelfarchive.catalog import GoogleBooksClient, MetadataReconciler
from shelfarchive.config import Settings, get_settings
from shelfarchive.exceptions import ShelfArchiveException
from shelfarchive.ingestion.url_normalizer import normalize_url
from shelfarchive.lexicon.analytics import trope_frequencies, trope_report_json
from shelfarchive.lexicon.filter import TagState
from shelfarchive.logging_config import configure_logging
from shelfarchive.matching.search import search_authors
from shelfarchive.storage import ArchiveRepository, JsonBlobStore


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shelfarchive", description="Personal bookshelf archive")
    parser.add_argument("--archive", default=settings.archive_path, help="Path to the archive file")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (DEBUG, INFO, ...)")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("shelves", help="List books grouped by shelf")

    lexicon = sub.add_parser("lexicon", help="Filter books by tropes")
    lexicon.add_argument("--include", action="append", default=[], metavar="TAG")
    lexicon.add_argument("--exclude", action="append", default=[], metavar="TAG")
    lexicon.add_argument("--query", default="", help="Title/author substring")
    lexicon.add_argument("--limit", type=int, default=settings.lexicon_display_limit)

    link = sub.add_parser("resolve-link", help="Normalize a vendor URL")
    link.add_argument("url")

    authors = sub.add_parser("authors", help="Search tracked authors")
    authors.add_argument("--query", default="")
    authors.add_argument("--favorites", action="store_true")

    tropes = sub.add_parser("tropes", help="Most common tropes")
    tropes.add_argument("--top", type=int, default=5)
    tropes.add_argument("--json", action="store_true", help="Print the JSON report")

    reconcile = sub.add_parser("reconcile", help="Fill cover/publisher from Google Books")
    reconcile.add_argument("book_id")
    reconcile.add_argument("--threshold", type=int, default=settings.cover_match_threshold)

    return parser


def _open_repository(args: argparse.Namespace, settings: Settings) -> ArchiveRepository:
    return ArchiveRepository(JsonBlobStore(args.archive, storage_key=settings.storage_key))


def _cmd_shelves(repo: ArchiveRepository) -> int:
    for shelf in repo.shelves_view():
        marker = " (virtual)" if shelf.is_virtual else ""
        print(f"{shelf.title}{marker} [{len(shelf.books)}]")
        for book in shelf.books:
            print(f"  - {book.title} / {book.author}")
    return 0


def _cmd_lexicon(repo: ArchiveRepository, args: argparse.Namespace) -> int:
    tag_map = {tag: TagState.INCLUDE for tag in args.include}
    tag_map.update({tag: TagState.EXCLUDE for tag in args.exclude})
    for book in repo.lexicon_view(tag_map, args.query, limit=args.limit):
        print(f"{book.title} / {book.author}  [{', '.join(book.tropes)}]")
    return 0


def _cmd_authors(repo: ArchiveRepository, args: argparse.Namespace) -> int:
    for pulse in search_authors(repo.author_pulses, args.query, favorites_only=args.favorites):
        star = "*" if pulse.is_favorite else " "
        print(f"{star} {pulse.name}")
    return 0


def _cmd_tropes(repo: ArchiveRepository, args: argparse.Namespace) -> int:
    stats = trope_frequencies(repo.books, top_n=args.top)
    if args.json:
        print(trope_report_json(stats))
    else:
        for stat in stats:
            print(f"{stat.count:>4}  {stat.trope}")
    return 0


async def _cmd_reconcile(repo: ArchiveRepository, args: argparse.Namespace, settings: Settings) -> int:
    book = repo.get_book(args.book_id)
    client = GoogleBooksClient(api_key=settings.google_books_api_key, timeout=settings.http_timeout)
    match = await MetadataReconciler(client, threshold=args.threshold).reconcile(book)
    if match is None:
        print(f"No confident match for '{book.title}'")
        return 1
    repo.update_book(book)
    print(f"Matched '{match.record.title}' (confidence {match.score})")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "resolve-link":
            ref = normalize_url(args.url)
            print(f"{ref.vendor.value} {ref.external_id}")
            return 0

        repo = _open_repository(args, settings)
        if args.command == "shelves":
            return _cmd_shelves(repo)
        if args.command == "lexicon":
            return _cmd_lexicon(repo, args)
        if args.command == "authors":
            return _cmd_authors(repo, args)
        if args.command == "tropes":
            return _cmd_tropes(repo, args)
        if args.command == "reconcile":
            return asyncio.run(_cmd_reconcile(repo, args, settings))
    except ShelfArchiveException as e:
        logger.debug(f"{e.code}: {e.detail}")
        print(e.message, file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":
    sys.exit(main())
