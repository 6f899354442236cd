"""
Command line interface.

Usage:
    potsweep [-v] show                      # Print the configured operations
    potsweep [-v] run [--dry-run]           # Run every operation once
    potsweep [-v] schedule --interval 60    # Run every operation on an interval
    potsweep login --client-id ... --client-secret ... --access-token ... --user-id ...
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import datetime
from typing import List, Optional

from potsweep.automation import operation_name
from potsweep.config import config_path, load_operations_file
from potsweep.db import get_db_session, init_db
from potsweep.errors import ConfigError, PotSweepError
from potsweep.logging_config import configure_logging
from potsweep.monzo.account_client import AccountClient
from potsweep.services.auth_service import (
    get_authenticated_monzo_client,
    save_monzo_tokens_to_user,
)
from potsweep.services.sweep_service import run_operations
from potsweep.validation_schemas import dump_operation

logger = logging.getLogger(__name__)


def build_client(user_id: Optional[str] = None) -> AccountClient:
    """Build an AccountClient from the stored credentials."""
    init_db()
    with next(get_db_session()) as db:
        monzo = get_authenticated_monzo_client(db, user_id)
    if monzo is None:
        raise ConfigError("no stored Monzo credentials, run `potsweep login` first")
    return AccountClient(monzo)


def run_once(config: Optional[str], user_id: Optional[str], dry_run: bool) -> None:
    operations = load_operations_file(config)
    if not operations:
        print("no operations configured ...")
        return
    client = build_client(user_id)
    asyncio.run(run_operations(client, operations, dry_run=dry_run))


def cmd_show(args) -> int:
    operations = load_operations_file(args.config)
    print(f"{len(operations)} operations in {config_path(args.config)}")
    for op in operations:
        print(f"{operation_name(op)}:")
        print(json.dumps(dump_operation(op), indent=2))
    return 0


def cmd_run(args) -> int:
    run_once(args.config, args.user_id, args.dry_run)
    return 0


def cmd_schedule(args) -> int:
    from apscheduler.schedulers.blocking import BlockingScheduler  # Lazy import

    def scheduled_run():
        logger.info(f"[SCHEDULER] Starting scheduled run at {datetime.now():%Y-%m-%d %H:%M:%S}")
        try:
            run_once(args.config, args.user_id, args.dry_run)
        except PotSweepError as e:
            # keep the scheduler alive, the next run starts from fresh state
            logger.error(f"[SCHEDULER] Scheduled run failed: {e}")

    scheduler = BlockingScheduler()
    scheduler.add_job(
        scheduled_run,
        "interval",
        minutes=args.interval,
        next_run_time=datetime.now(),
        id="potsweep_run",
        replace_existing=True,
    )
    logger.info(f"[SCHEDULER] Running operations every {args.interval} minutes")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("[SCHEDULER] Stopping")
    return 0


def cmd_login(args) -> int:
    missing = [
        name
        for name in ("client_id", "client_secret", "access_token", "user_id")
        if not getattr(args, name)
    ]
    if missing:
        raise ConfigError(f"missing credentials: {', '.join(missing)}")

    init_db()
    with next(get_db_session()) as db:
        user = save_monzo_tokens_to_user(
            db,
            {
                "user_id": args.user_id,
                "access_token": args.access_token,
                "refresh_token": args.refresh_token,
            },
            client_id=args.client_id,
            client_secret=args.client_secret,
        )
        print(f"Stored credentials for {user.monzo_user_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="potsweep", description="Rebalance money between a Monzo account and its pots"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)"
    )
    parser.add_argument("--config", help="Operations file (default: $POTSWEEP_CONFIG)")
    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="Print the configured operations")
    show.set_defaults(func=cmd_show)

    run = subparsers.add_parser("run", help="Run every configured operation once")
    run.add_argument("--dry-run", action="store_true", help="Show transactions without applying them")
    run.add_argument("--user-id", help="Monzo user whose stored credentials to use")
    run.set_defaults(func=cmd_run)

    schedule = subparsers.add_parser("schedule", help="Run the operations on an interval")
    schedule.add_argument("--interval", type=int, default=60, help="Minutes between runs")
    schedule.add_argument("--dry-run", action="store_true", help="Show transactions without applying them")
    schedule.add_argument("--user-id", help="Monzo user whose stored credentials to use")
    schedule.set_defaults(func=cmd_schedule)

    login = subparsers.add_parser("login", help="Store Monzo API credentials")
    login.add_argument("--client-id", default=os.getenv("MONZO_CLIENT_ID"))
    login.add_argument("--client-secret", default=os.getenv("MONZO_CLIENT_SECRET"))
    login.add_argument("--access-token", default=os.getenv("MONZO_ACCESS_TOKEN"))
    login.add_argument("--refresh-token", default=os.getenv("MONZO_REFRESH_TOKEN"))
    login.add_argument("--user-id", default=os.getenv("MONZO_USER_ID"))
    login.set_defaults(func=cmd_login)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger.info("logging configured")

    func = getattr(args, "func", cmd_show)
    try:
        return func(args)
    except PotSweepError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
