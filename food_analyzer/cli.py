"""Command line entry point.

Usage:
    food-analyzer analyze lunch.jpg --meal lunch --ledger ~/.food-analyzer/ledger.json
    food-analyzer summary --ledger ~/.food-analyzer/ledger.json --save-report ./reports
    food-analyzer reset --ledger ~/.food-analyzer/ledger.json
    food-analyzer serve --port 8080
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from food_analyzer.application.meal.commands import (
    CommitAnalysisCommand,
    CommitAnalysisCommandHandler,
    ResetLedgerCommand,
    ResetLedgerCommandHandler,
)
from food_analyzer.application.meal.queries import (
    GetDailySummaryQuery,
    GetDailySummaryQueryHandler,
)
from food_analyzer.domain.meal.core.value_objects.meal_type import MealType
from food_analyzer.domain.meal.ledger.daily_ledger import DailyLedger
from food_analyzer.domain.shared.errors import DomainError, EmptySummaryError
from food_analyzer.infrastructure.config import Settings, configure_logging, load_settings
from food_analyzer.infrastructure.persistence.report_exporter import save_summary_report
from food_analyzer.infrastructure.providers import (
    create_ledger_store,
    load_ledger,
    open_orchestrator,
)

logger = logging.getLogger("food_analyzer.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="food-analyzer",
        description="Identify foods in a photo and track daily nutrient intake",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a meal photo")
    analyze.add_argument("image", type=Path, help="Image file (JPEG, PNG, ...)")
    analyze.add_argument(
        "--meal",
        dest="meal",
        default=None,
        help=f"Add the result to a meal ({', '.join(MealType.values())})",
    )
    analyze.add_argument("--ledger", type=Path, default=None, help="Ledger JSON file")
    analyze.add_argument("--save-report", dest="save_report", type=Path, default=None)

    summary = sub.add_parser("summary", help="Print the daily summary")
    summary.add_argument("--ledger", type=Path, default=None, help="Ledger JSON file")
    summary.add_argument("--save-report", dest="save_report", type=Path, default=None)

    reset = sub.add_parser("reset", help="Clear the daily ledger")
    reset.add_argument("--ledger", type=Path, default=None, help="Ledger JSON file")

    serve = sub.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8080)
    return parser


def _print_summary(ledger: DailyLedger, save_dir: Optional[Path]) -> str:
    summary = asyncio.run(GetDailySummaryQueryHandler(ledger).handle(GetDailySummaryQuery()))
    if summary.report:
        print(summary.report, end="")
    else:
        print("No summary data")
    if save_dir is not None:
        path = save_summary_report(summary.report, save_dir)
        print(f"[INFO] summary written to {path}")
    return summary.report


async def _analyze(settings: Settings, args: argparse.Namespace, ledger: DailyLedger) -> int:
    meal_type = MealType.parse(args.meal) if args.meal else None
    try:
        image_bytes = args.image.read_bytes()
    except OSError as e:
        print(f"❌ Unable to load image: {e}", file=sys.stderr)
        return 1

    async with open_orchestrator(settings) as orchestrator:
        outcome = await orchestrator.analyze(image_bytes)
        print(outcome.progress)
        if outcome.error is not None:
            return 1

        if meal_type is not None:
            handler = CommitAnalysisCommandHandler(
                orchestrator, ledger, create_ledger_store(settings)
            )
            if await handler.handle(CommitAnalysisCommand(meal_type=meal_type)):
                print(f"\nAdded to {meal_type.value}\n")
            else:
                print("\nNothing to add\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()

    try:
        settings = load_settings()
        if getattr(args, "ledger", None) is not None:
            settings = replace(settings, ledger_path=args.ledger)
        configure_logging(settings.log_level)

        if args.command == "serve":
            import uvicorn

            from food_analyzer.api.app import create_app

            uvicorn.run(create_app(settings), host=args.host, port=args.port)
            return 0

        store = create_ledger_store(settings)
        ledger = load_ledger(store)

        if args.command == "analyze":
            code = asyncio.run(_analyze(settings, args, ledger))
            if code == 0 and (args.meal or args.save_report):
                _print_summary(ledger, args.save_report)
            return code

        if args.command == "summary":
            _print_summary(ledger, args.save_report)
            return 0

        if args.command == "reset":
            asyncio.run(ResetLedgerCommandHandler(ledger, store=store).handle(ResetLedgerCommand()))
            print("[INFO] ledger reset")
            return 0
    except EmptySummaryError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except DomainError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
