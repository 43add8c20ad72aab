"""Command-line shell over the routing engine.

Commands::

    skillroute route "borrow checker error E0382"   # exit 0 on a match, 1 otherwise
    skillroute validate                             # exit 0 iff every skill is compliant
    skillroute lint                                 # exit 0 iff every description is clean
    skillroute serve --port 8000                    # run the HTTP API

Load issues are logged to stderr; results go to stdout.  With ``--strict``
a duplicate skill id or unparseable document aborts with exit code 2.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence

from skillroute import __version__
from skillroute.config import settings
from skillroute.routing.router import SkillRouter
from skillroute.skills.models import LoadResult
from skillroute.skills.registry import SkillRegistry
from skillroute.utils.exceptions import SkillRouteError
from skillroute.utils.logging import get_logger, setup_logging
from skillroute.validation.compliance import ComplianceValidator
from skillroute.validation.frontmatter import FrontmatterLinter

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_LOAD_ERROR = 2


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillroute",
        description="Route queries to skill documents and check their structure.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--skills-dir",
        default=None,
        help=f"Skills root containing <skill>/SKILL.md (default: {settings.skills_dir})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail (exit 2) when a document is unparseable or declares a duplicate id",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    route_p = sub.add_parser("route", help="Pick the skill(s) for a query")
    route_p.add_argument("query", nargs="+", help="Query text")
    route_p.add_argument("--max-hops", type=_non_negative_int, default=None, help="Escalation hop limit")
    route_p.add_argument("--json", action="store_true", help="Print the decision as JSON")

    validate_p = sub.add_parser("validate", help="Check mandatory sections")
    validate_p.add_argument(
        "--required",
        action="append",
        default=None,
        metavar="SECTION",
        help="Required section (repeatable); defaults to the configured set",
    )
    validate_p.add_argument("--json", action="store_true", help="Print reports as JSON")

    lint_p = sub.add_parser("lint", help="Lint skill descriptions")
    lint_p.add_argument("--json", action="store_true", help="Print reports as JSON")

    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=settings.host)
    serve_p.add_argument("--port", type=int, default=settings.port)

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _load(args: argparse.Namespace) -> LoadResult:
    registry = SkillRegistry(max_workers=settings.load_workers)
    result = registry.load_directory(
        args.skills_dir or settings.skills_dir,
        filename=settings.skill_filename,
    )
    for issue in result.issues:
        logger.warning(
            "load_issue",
            kind=issue.kind.value,
            document=issue.document,
            skill_id=issue.skill_id,
            detail=issue.message,
        )
    if args.strict:
        result.raise_for_issues()
    return result


def cmd_route(args: argparse.Namespace, result: LoadResult) -> int:
    hops = settings.max_hops if args.max_hops is None else args.max_hops
    router = SkillRouter(result.catalog, max_hops=hops)
    decision = router.route(" ".join(args.query))

    if args.json:
        print(decision.model_dump_json(indent=2))
    elif decision.primary is None:
        print("no matching skill")
    else:
        print(f"primary: {decision.primary.skill_id} (score {decision.primary.score})")
        print(f"path: {' -> '.join(decision.path)}")
        print(f"rationale: {', '.join(decision.rationale)}")

    return EXIT_OK if decision.matched else EXIT_FAILED


def cmd_validate(args: argparse.Namespace, result: LoadResult) -> int:
    validator = ComplianceValidator(args.required or settings.required_sections)
    reports = validator.validate(result.catalog)
    failing = [r for r in reports if not r.compliant]

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in reports], indent=2, ensure_ascii=False))
    else:
        for report in failing:
            print(report.skill_id)
            print(f"    missing: {', '.join(report.missing_sections)}")
        print(f"checked: {len(reports)}")
        print(f"missing required sections: {len(failing)}")

    return EXIT_OK if not failing else EXIT_FAILED


def cmd_lint(args: argparse.Namespace, result: LoadResult) -> int:
    reports = FrontmatterLinter(settings.description_max_chars).lint(result.catalog)
    dirty = [r for r in reports if not r.clean]

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in reports], indent=2, ensure_ascii=False))
    else:
        for report in dirty:
            for problem in report.problems:
                print(f"{report.skill_id}: {problem}")
        print(f"checked: {len(reports)}")
        print(f"with problems: {len(dirty)}")

    return EXIT_OK if not dirty else EXIT_FAILED


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    if args.skills_dir:
        settings.skills_dir = args.skills_dir
    uvicorn.run("skillroute.main:app", host=args.host, port=args.port)
    return EXIT_OK


_COMMANDS = {
    "route": cmd_route,
    "validate": cmd_validate,
    "lint": cmd_lint,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.verbose or settings.debug, level=settings.log_level or None)

    if args.command == "serve":
        return cmd_serve(args)

    try:
        result = _load(args)
    except SkillRouteError as exc:
        logger.error("catalog_rejected", detail=str(exc))
        return EXIT_LOAD_ERROR

    return _COMMANDS[args.command](args, result)


if __name__ == "__main__":
    sys.exit(main())
