import argparse
import json
from pathlib import Path

from .env import load_env, load_settings

from . import __version__
from .actions import JobActions
from .auth import AuthUser, StaticAuthProvider
from .database import get_session_factory, init_database
from .logger import get_logger


def _print_envelope(envelope: dict) -> None:
    print(json.dumps(envelope, indent=2, ensure_ascii=False))
    if not envelope.get("status", False):
        raise SystemExit(2)


def _actions(args: argparse.Namespace) -> JobActions:
    settings = load_settings()
    database_url = args.db or settings.database_url
    engine = init_database(database_url)
    user = AuthUser(id=args.user) if getattr(args, "user", None) else None
    return JobActions(
        get_session_factory(engine),
        auth=StaticAuthProvider(user),
        jobs_per_page=settings.jobs_per_page,
    )


def cmd_init_db(args: argparse.Namespace) -> None:
    database_url = args.db or load_settings().database_url
    init_database(database_url)
    print(f"Database ready: {database_url}")


def cmd_list(args: argparse.Namespace) -> None:
    filters = {
        "workmode": args.workmode,
        "EmpType": args.emp_type,
        "salaryrange": args.salary,
        "experience": args.experience or [],
        "city": args.city,
        "search": args.search,
        "sortby": args.sortby,
        "page": args.page,
    }
    if args.limit is not None:
        filters["limit"] = args.limit
    _print_envelope(_actions(args).get_all_jobs(filters))


def cmd_recent(args: argparse.Namespace) -> None:
    _print_envelope(_actions(args).get_recent_jobs())


def cmd_show(args: argparse.Namespace) -> None:
    _print_envelope(_actions(args).get_job_by_id({"id": args.id}))


def cmd_recommend(args: argparse.Namespace) -> None:
    _print_envelope(_actions(args).get_recommended_jobs({"id": args.id, "category": args.category}))


def cmd_cities(args: argparse.Namespace) -> None:
    _print_envelope(_actions(args).get_city_filters())


def _load_json(path_str: str) -> dict:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def cmd_post(args: argparse.Namespace) -> None:
    _print_envelope(_actions(args).create_job(_load_json(args.input)))


def cmd_update(args: argparse.Namespace) -> None:
    payload = _load_json(args.input)
    payload["jobId"] = args.id
    _print_envelope(_actions(args).update_job(payload))


def cmd_sweep(args: argparse.Namespace) -> None:
    actions = _actions(args)
    actions.update_expired_jobs()
    print(f"Expired jobs swept: {actions.logger.get_metrics()['jobs_expired']}")


def main():
    # Load .env if present (JOBBOARD_DATABASE_URL, JOBBOARD_LOG_LEVEL, etc.)
    load_env()
    settings = load_settings()
    get_logger(level=settings.log_level, log_dir=settings.log_dir)

    parser = argparse.ArgumentParser(prog="jobboard", description="Job board backend CLI")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Database URL (default: JOBBOARD_DATABASE_URL or sqlite:///data/jobs.db)")

    subparsers = parser.add_subparsers(dest="command")
    init = subparsers.add_parser("init-db", help="Create the database tables")
    init.set_defaults(func=cmd_init_db)

    lst = subparsers.add_parser("list", help="List visible jobs with filters")
    lst.add_argument("--workmode", action="append", default=[], help="remote, hybrid or onsite (repeatable)")
    lst.add_argument("--emp-type", action="append", default=[], help="full_time, part_time, internship, contract (repeatable)")
    lst.add_argument("--salary", action="append", default=[], help="Salary bucket, e.g. 3-6L (repeatable)")
    lst.add_argument("--experience", action="append", help="Experience bucket, e.g. 1-3 (repeatable)")
    lst.add_argument("--city", action="append", default=[], help="City (repeatable)")
    lst.add_argument("--search", help="Title contains")
    lst.add_argument("--sortby", help="postedat_desc (default), postedat_asc, maxsalary_desc, ...")
    lst.add_argument("--page", type=int, default=1, help="Page number (default 1)")
    lst.add_argument("--limit", type=int, help="Page size (default JOBBOARD_JOBS_PER_PAGE)")
    lst.set_defaults(func=cmd_list)

    rec = subparsers.add_parser("recent", help="Show the newest visible jobs")
    rec.set_defaults(func=cmd_recent)

    show = subparsers.add_parser("show", help="Show one job")
    show.add_argument("--id", required=True, help="Job id")
    show.set_defaults(func=cmd_show)

    rcm = subparsers.add_parser("recommend", help="Related jobs for a job")
    rcm.add_argument("--id", required=True, help="Reference job id")
    rcm.add_argument("--category", required=True, help="Reference job category")
    rcm.set_defaults(func=cmd_recommend)

    cts = subparsers.add_parser("cities", help="List cities with visible jobs")
    cts.set_defaults(func=cmd_cities)

    pst = subparsers.add_parser("post", help="Create a job from a JSON payload")
    pst.add_argument("--input", required=True, help="Path to job JSON")
    pst.add_argument("--user", required=True, help="Id of the posting user")
    pst.set_defaults(func=cmd_post)

    upd = subparsers.add_parser("update", help="Replace a job from a JSON payload")
    upd.add_argument("--id", required=True, help="Job id")
    upd.add_argument("--input", required=True, help="Path to job JSON")
    upd.add_argument("--user", required=True, help="Id of the owning user")
    upd.set_defaults(func=cmd_update)

    swp = subparsers.add_parser("sweep", help="Mark jobs past their expiry date as expired (cron)")
    swp.set_defaults(func=cmd_sweep)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
