# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for abn-search."""

import argparse
import logging
import sys
from pathlib import Path

from abn_search import __version__
from abn_search.client import STATES, AbnSearchClient, NameSearchOptions
from abn_search.config import ClientConfig
from abn_search.convert import write_csv, write_jsonl
from abn_search.errors import AbnSearchError
from abn_search.identifiers import format_abn, format_acn
from abn_search.schema import write_json_schema
from abn_search.validate import validate_entities
from abn_search.verify import verify_outputs

logger = logging.getLogger("abn_search")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abn-search",
        description=(
            "Validate Australian Business Numbers (ABN) and Company Numbers (ACN) "
            "and look them up in the Australian Business Register."
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--guid",
        default=None,
        help="ABR web services GUID (default: $ABN_LOOKUP_GUID)",
    )
    parser.add_argument(
        "--proxy",
        default=None,
        metavar="URL",
        help="HTTP(S) proxy for registry requests (default: $ABN_LOOKUP_PROXY)",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        metavar="URL",
        help="Registry SOAP endpoint (default: the public ABR endpoint)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Validate identifiers offline")
    check.add_argument("values", nargs="+", metavar="VALUE")
    check.add_argument(
        "--acn", action="store_true", help="Treat values as ACNs instead of ABNs"
    )

    lookup = sub.add_parser("lookup", help="Look up a single entity")
    ident = lookup.add_mutually_exclusive_group(required=True)
    ident.add_argument("--abn", default=None)
    ident.add_argument("--acn", default=None)
    lookup.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Also write the entity to a JSONL file",
    )

    search = sub.add_parser("search", help="Search entities by name")
    search.add_argument("name")
    search.add_argument(
        "--state",
        action="append",
        choices=STATES,
        default=None,
        help="Restrict to a state (repeatable, default: all)",
    )
    search.add_argument("--postcode", default=None)
    search.add_argument("--min-score", type=int, default=50, metavar="N")
    search.add_argument("--max-results", type=int, default=10, metavar="N")
    search.add_argument(
        "--no-enrich",
        action="store_true",
        help="Skip the follow-up ABN lookup for each match",
    )
    search.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path("data"),
        metavar="DIR",
        help="Output directory for result files (default: data/)",
    )
    search.add_argument(
        "--skip-verify",
        action="store_true",
        help="Skip output verification step",
    )
    return parser


def _check(args: argparse.Namespace) -> int:
    fmt = format_acn if args.acn else format_abn
    invalid = 0
    for value in args.values:
        formatted = fmt(value)
        if formatted:
            print(formatted)
        else:
            print(f"INVALID: {value}")
            invalid += 1
    logger.debug("%d of %d value(s) invalid", invalid, len(args.values))
    return 1 if invalid else 0


def _lookup(client: AbnSearchClient, args: argparse.Namespace) -> int:
    if args.abn is not None:
        logger.info("Looking up ABN %s", args.abn)
        entity = client.lookup(args.abn)
    else:
        logger.info("Looking up ACN %s", args.acn)
        entity = client.lookup_by_acn(args.acn)

    if args.output is not None:
        write_jsonl([entity], args.output, query=args.abn or args.acn)
        logger.debug("Wrote entity to %s", args.output)

    print(f"{entity.formatted_abn()}  {entity.primary_name or ''}".rstrip())
    if entity.secondary_name:
        print(f"  also: {entity.secondary_name}")
    return 0


def _search(client: AbnSearchClient, args: argparse.Namespace) -> int:
    options = NameSearchOptions(
        states=frozenset(args.state) if args.state else frozenset(STATES),
        postcode=args.postcode,
        minimum_score=args.min_score,
        max_search_results=args.max_results,
    )
    logger.info("Searching for %r", args.name)
    entities = client.search_by_name(args.name, options, enrich=not args.no_enrich)
    logger.info("Found %d entities", len(entities))

    validation = validate_entities(entities)
    for w in validation.warnings:
        logger.warning("WARN: %s", w)
    if not validation.ok:
        for e in validation.errors:
            logger.error("ERROR: %s", e)
        logger.error("%d validation error(s), aborting", len(validation.errors))
        return 1

    out = args.output_dir
    csv_path = out / "entities.csv"
    jsonl_path = out / "entities.jsonl"
    json_schema_path = out / "entities.json-schema.json"

    logger.info("Writing outputs to %s/", out)
    n_csv = write_csv(entities, csv_path)
    logger.debug("Wrote %d rows to %s", n_csv, csv_path)
    n_jsonl = write_jsonl(entities, jsonl_path, query=args.name, source=client.config.endpoint)
    logger.debug("Wrote %d rows to %s", n_jsonl, jsonl_path)
    write_json_schema(json_schema_path)
    logger.debug("Wrote JSON Schema to %s", json_schema_path)

    if not args.skip_verify:
        logger.info("Verifying outputs...")
        verify_errors = verify_outputs(
            csv_path, jsonl_path, len(entities), json_schema_path=json_schema_path
        )
        if verify_errors:
            for ve in verify_errors:
                logger.error("VERIFY ERROR: %s", ve)
            return 1

    print(f"OK: wrote {len(entities)} records to {out}/")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the abn-search CLI."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "check":
        code = _check(args)
    else:
        config = ClientConfig.from_env(
            guid=args.guid,
            proxy=args.proxy,
            endpoint=args.endpoint,
            timeout=args.timeout,
        )
        client = AbnSearchClient(config)
        try:
            if args.command == "lookup":
                code = _lookup(client, args)
            else:
                code = _search(client, args)
        except AbnSearchError as exc:
            logger.error("%s", exc)
            code = 1

    if code:
        sys.exit(code)
