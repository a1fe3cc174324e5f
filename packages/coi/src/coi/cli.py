"""CLI for running and resolving conflict-of-interest checks."""

import argparse
import json

import structlog

from coi.audit import CONFLICT_RESOLVE_EVENT, LogAuditRecorder
from coi.checker import ConflictChecker
from coi.config import ConflictConfig
from coi.entities import extract_entities
from coi.fuzzy import fuzzy_match_multiple
from coi.io import read_matters, write_result
from coi.logging import configure_logging
from coi.normalize import normalize
from coi.repository import InMemoryMatterRepository
from coi.schemas import result_to_dict
from coi.store import CheckNotFoundError, ConflictStoreError, JsonConflictStore
from coi.types import ConflictCheckParams, ConflictCheckResult, ConflictStatus


def _build_config(args: argparse.Namespace) -> ConflictConfig:
    """Build a ConflictConfig from CLI args."""
    config = ConflictConfig()
    if args.name_threshold is not None:
        config.thresholds.name = args.name_threshold
    if args.entity_threshold is not None:
        config.thresholds.entity = args.entity_threshold
    if args.asymmetric:
        config.similarity.symmetric = False
    return config


def _print_result(result: ConflictCheckResult, show: bool) -> None:
    if show and result.conflicts:
        print(f"\n=== Conflicts ({result.total_matches}) ===")
        for c in result.conflicts:
            print(
                f"  [{c.risk_level.value:>8}] {c.type.value:<13} "
                f"{c.query_name!r} ~ {c.matched_name!r} "
                f"(matter {c.matter_id}, score {c.similarity_score:.3f})"
            )

    print(
        f"\nRisk: {result.risk_level.value}  "
        f"high={result.high_risk_count} medium={result.medium_risk_count} "
        f"low={result.low_risk_count}"
    )
    print(f"Recommendation: {result.recommendation.value}")
    print(result.summary)


def cmd_check(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    log = structlog.get_logger()

    if not (args.client or args.adverse or args.company or args.description):
        parser.error("at least one of --client, --adverse, --company, --description is required")

    try:
        matters = read_matters(args.matters, owner_id=args.owner)
    except ValueError as e:
        parser.error(str(e))
    log.info("matters_file_loaded", path=args.matters, count=len(matters))

    store = None
    if args.store and not args.no_save:
        store = JsonConflictStore(args.store)
        store.load()

    checker = ConflictChecker(
        InMemoryMatterRepository(matters),
        config=_build_config(args),
        audit=LogAuditRecorder(),
        store=store,
    )
    params = ConflictCheckParams(
        owner_id=args.owner,
        client_name=args.client,
        adverse_parties=args.adverse or [],
        company_names=args.company or [],
        matter_description=args.description,
        exclude_matter_id=args.exclude,
    )

    result, check_id = checker.check_and_save(params)

    _print_result(result, args.show)
    if check_id:
        print(f"Saved check: {check_id}")
    elif store is not None:
        print(f"Check not saved to {args.store} (see log)")

    if args.output:
        write_result(result, args.output, check_id)
        print(f"\nSaved to: {args.output}")
    elif args.json:
        data = result_to_dict(result)
        if check_id:
            data["conflictCheckId"] = check_id
        print(json.dumps(data, indent=2))


def cmd_resolve(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    store = JsonConflictStore(args.store)
    store.load()
    try:
        store.update_resolution(args.id, args.status, args.notes, args.resolver, args.owner)
    except CheckNotFoundError:
        parser.error(f"no check with id {args.id!r} in {args.store}")
    except ConflictStoreError as e:
        parser.error(str(e))

    if args.resolver:
        LogAuditRecorder().record(
            args.resolver,
            CONFLICT_RESOLVE_EVENT,
            {"check_id": args.id, "status": args.status, "notes": args.notes},
        )
    print(f"Check {args.id} -> {args.status}")


def cmd_search(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    config = ConflictConfig()
    if args.limit is not None:
        config.fuzzy.limit = args.limit
    threshold = args.threshold if args.threshold is not None else config.thresholds.name

    try:
        matters = read_matters(args.matters, owner_id=args.owner)
    except ValueError as e:
        parser.error(str(e))
    if args.owner:
        matters = InMemoryMatterRepository(matters).list_matters(args.owner)

    # Each party name maps back to the matters and roles it appears in
    roles: dict[str, list[str]] = {}
    for m in matters:
        if m.client_name:
            roles.setdefault(m.client_name, []).append(f"{m.id}:client")
        if m.adverse_party:
            roles.setdefault(m.adverse_party, []).append(f"{m.id}:adverse")

    names = list(roles)
    results = fuzzy_match_multiple(args.name, names, threshold, config.fuzzy.limit)

    print(f"\n=== Matches for {args.name!r} ({len(results)}) ===")
    if not results:
        print("  No matches found.")
    for r in results:
        print(f"  {r.score:.3f}  {r.target!r}  [{', '.join(roles[r.target])}]")


def cmd_normalize(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    for name in args.names:
        print(f"{name!r} -> {normalize(name)!r}")


def cmd_entities(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    entities = extract_entities(args.text)
    if not entities:
        print("  No entities found.")
        return
    for e in entities:
        print(
            f"  {e.text!r} {e.type.value} conf={e.confidence:.2f} "
            f"[{e.start_index}:{e.end_index}]"
        )


def main() -> None:
    # Parent parser with global options (inherited by all subcommands)
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: COI_LOG_LEVEL or INFO)",
    )
    parent_parser.add_argument(
        "--log-json",
        action="store_true",
        help="Render log events as JSON lines",
    )

    parser = argparse.ArgumentParser(
        description="Conflict of interest checking CLI",
        parents=[parent_parser],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check subcommand
    check_parser = subparsers.add_parser("check", parents=[parent_parser], help="Run a conflict check")
    check_parser.add_argument("--matters", required=True, help="Matters file (.csv, .jsonl, .xlsx)")
    check_parser.add_argument("--owner", required=True, help="Owner id whose matters are searched")
    check_parser.add_argument("--client", help="Prospective client name")
    check_parser.add_argument("--adverse", action="append", metavar="NAME", help="Adverse party (repeatable)")
    check_parser.add_argument("--company", action="append", metavar="NAME", help="Related company name (repeatable)")
    check_parser.add_argument("--description", help="Matter description text")
    check_parser.add_argument("--exclude", metavar="MATTER_ID", help="Matter id to leave out of the search")
    check_parser.add_argument("--store", default="localdata/conflict_checks.json", help="Path to check store file")
    check_parser.add_argument("--no-save", action="store_true", help="Do not persist the result")
    check_parser.add_argument("--output", help="Write the result JSON to this path")
    check_parser.add_argument("--json", action="store_true", help="Print the result JSON")
    check_parser.add_argument("--show", action="store_true", help="Display each conflict on screen")
    check_parser.add_argument("--name-threshold", type=float, help="Fuzzy match threshold for names (default: 0.7)")
    check_parser.add_argument("--entity-threshold", type=float, help="Fuzzy match threshold for extracted entities (default: 0.75)")
    check_parser.add_argument("--asymmetric", action="store_true", help="Weight description similarity on the query's terms only")
    check_parser.set_defaults(func=cmd_check)

    # resolve subcommand
    resolve_parser = subparsers.add_parser("resolve", parents=[parent_parser], help="Record the resolution of a saved check")
    resolve_parser.add_argument("--store", default="localdata/conflict_checks.json", help="Path to check store file")
    resolve_parser.add_argument("--id", required=True, help="Check id")
    resolve_parser.add_argument(
        "--status",
        required=True,
        choices=[s.value for s in ConflictStatus if s != ConflictStatus.PENDING],
    )
    resolve_parser.add_argument("--notes", help="Resolution notes")
    resolve_parser.add_argument("--resolver", help="Id of the person resolving the check")
    resolve_parser.add_argument("--owner", help="Only resolve the check if it belongs to this owner")
    resolve_parser.set_defaults(func=cmd_resolve)

    # search subcommand
    search_parser = subparsers.add_parser("search", parents=[parent_parser], help="Rank party names in a matters file against one name")
    search_parser.add_argument("--matters", required=True, help="Matters file (.csv, .jsonl, .xlsx)")
    search_parser.add_argument("--name", required=True, help="Name to search for")
    search_parser.add_argument("--owner", help="Only search this owner's matters")
    search_parser.add_argument("--threshold", type=float, help="Minimum score (default: 0.7)")
    search_parser.add_argument("--limit", type=int, help="Maximum results (default: 10)")
    search_parser.set_defaults(func=cmd_search)

    # normalize subcommand
    normalize_parser = subparsers.add_parser("normalize", parents=[parent_parser], help="Show normalized forms of names")
    normalize_parser.add_argument("names", nargs="+")
    normalize_parser.set_defaults(func=cmd_normalize)

    # entities subcommand
    entities_parser = subparsers.add_parser("entities", parents=[parent_parser], help="Extract entities from text")
    entities_parser.add_argument("text")
    entities_parser.set_defaults(func=cmd_entities)

    args = parser.parse_args()
    configure_logging(args.log_level, json_output=args.log_json)
    args.func(args, parser)


if __name__ == "__main__":
    main()
