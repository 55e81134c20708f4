#!/usr/bin/env python
"""Manage and query an S3 Vectors index from the command line.

Usage:
    python -m scripts.manage_index --bucket my-bucket --index items \\
        --dimensions 3 --distance cosine create
    python -m scripts.manage_index ... search 1 1 1 --count 3
    python -m scripts.manage_index ... search-id 42 --with-metadata

Results are printed as JSON on stdout.
"""

import argparse
import json
import sys
from typing import Any

from vectorbucket.index import Index
from vectorbucket.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def _dump(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def run_command(index: Index, args: argparse.Namespace) -> int:
    """Run a subcommand against an index.

    Args:
        index: Index handle built from the common options.
        args: Parsed arguments.

    Returns:
        Process exit status.
    """
    if args.command == "create":
        index.create()
        logger.info(f"Index {index.name} created")
        return 0

    if args.command == "drop":
        index.drop()
        return 0

    if args.command == "exists":
        exists = index.exists()
        _dump({"index": index.name, "exists": exists})
        return 0 if exists else 1

    if args.command == "info":
        _dump(index.info())
        return 0

    if args.command == "find":
        item = index.find(args.id, with_metadata=args.with_metadata)
        if item is None:
            logger.warning(f"Item {args.id} not found")
            return 1
        _dump(item.model_dump())
        return 0

    filter_ = json.loads(args.filter) if args.filter else None
    if args.command == "search":
        results = index.search(
            args.vector,
            count=args.count,
            with_metadata=args.with_metadata,
            filter=filter_,
        )
    else:
        results = index.search_id(
            args.id,
            count=args.count,
            with_metadata=args.with_metadata,
            filter=filter_,
        )
    _dump([r.model_dump(exclude_none=True) for r in results])
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Manage and query an S3 Vectors index",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--bucket",
        default=None,
        help="Vector bucket name (defaults to VECTOR_INDEX_BUCKET)",
    )
    parser.add_argument("--index", required=True, help="Index name")
    parser.add_argument(
        "--dimensions",
        type=int,
        required=True,
        help="Vector dimensions",
    )
    parser.add_argument(
        "--distance",
        choices=["euclidean", "cosine"],
        default="cosine",
        help="Distance metric",
    )
    parser.add_argument(
        "--id-type",
        choices=["string", "integer"],
        default="string",
        help="Item id type",
    )
    parser.add_argument(
        "--non-filterable",
        action="append",
        default=None,
        help="Metadata key to exclude from filtering (repeatable)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("create", help="Create the index")
    subparsers.add_parser("drop", help="Delete the index")
    subparsers.add_parser("exists", help="Check whether the index exists")
    subparsers.add_parser("info", help="Show the index description")

    find = subparsers.add_parser("find", help="Fetch an item by id")
    find.add_argument("id", help="Item id")
    find.add_argument("--with-metadata", action="store_true")

    search = subparsers.add_parser("search", help="Search by vector")
    search.add_argument("vector", type=float, nargs="+", help="Query vector")

    search_id = subparsers.add_parser("search-id", help="Search by item id")
    search_id.add_argument("id", help="Item id")

    for sub in (search, search_id):
        sub.add_argument("--count", type=int, default=5, help="Number of results")
        sub.add_argument("--with-metadata", action="store_true")
        sub.add_argument("--filter", default=None, help="Metadata filter as JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level)

    index = Index(
        args.index,
        bucket=args.bucket,
        dimensions=args.dimensions,
        distance=args.distance,
        id_type=args.id_type,
        non_filterable=args.non_filterable,
    )

    sys.exit(run_command(index, args))


if __name__ == "__main__":
    main()
