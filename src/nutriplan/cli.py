"""CLI entry point for nutriplan."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

DEFAULT_DATA_DIR = Path.home() / ".nutriplan"


def get_workspace(args: argparse.Namespace):
    from nutriplan.reports import Workspace

    data_dir = Path(args.data_dir) if args.data_dir else DEFAULT_DATA_DIR
    config_file = Path(args.config) if args.config else None
    return Workspace(
        data_dir,
        config_file,
        calories=getattr(args, "calories", None),
        weeks=getattr(args, "weeks", None),
        no_convert=getattr(args, "no_convert", False),
    )


def cmd_shopping_list(args: argparse.Namespace) -> None:
    from nutriplan.reports import run_shopping_list

    run_shopping_list(get_workspace(args), output_format=args.format)


def cmd_nutrition(args: argparse.Namespace) -> None:
    from nutriplan.reports import run_nutrition

    run_nutrition(get_workspace(args), on_date=args.date, output_format=args.format)


def cmd_metabolism(args: argparse.Namespace) -> None:
    from nutriplan.reports import run_metabolism

    run_metabolism(get_workspace(args), output_format=args.format)


def cmd_projection(args: argparse.Namespace) -> None:
    from nutriplan.reports import run_projection

    run_projection(get_workspace(args), output_format=args.format)


def cmd_calorie_log(args: argparse.Namespace) -> None:
    from nutriplan.reports import run_calorie_log

    run_calorie_log(
        get_workspace(args),
        today=args.today,
        save=args.save,
        output_format=args.format,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutriplan",
        description="Shopping lists, nutrition totals and weight trends for a weekly meal plan",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help=f"Directory with meals/, week-plan.yaml and profile.yaml (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument("--config", type=str, default=None, help="Settings YAML file")
    parser.add_argument(
        "--calories", type=int, default=None, help="Override the daily calorie target"
    )
    parser.add_argument(
        "--no-convert",
        action="store_true",
        help="Use profile weight as-is in the BMR formula, even when stored in lb",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging verbosity (default: info)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # shopping-list
    p_shop = sub.add_parser("shopping-list", help="Generate the week's shopping list")
    p_shop.add_argument(
        "--format", type=str, choices=["json", "markdown", "text"], default="markdown"
    )
    p_shop.set_defaults(func=cmd_shopping_list)

    # nutrition
    p_nut = sub.add_parser("nutrition", help="Daily nutrition totals for the plan")
    p_nut.add_argument("--date", type=str, help="Only this day (YYYY-MM-DD)")
    p_nut.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_nut.set_defaults(func=cmd_nutrition)

    # metabolism
    p_met = sub.add_parser("metabolism", help="BMR and TDEE for the profile")
    p_met.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_met.set_defaults(func=cmd_metabolism)

    # projection
    p_proj = sub.add_parser("projection", help="Projected weight over the coming weeks")
    p_proj.add_argument("--weeks", type=int, default=None)
    p_proj.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_proj.set_defaults(func=cmd_projection)

    # calorie-log
    p_log = sub.add_parser("calorie-log", help="Update and show the daily calorie log")
    p_log.add_argument("--today", type=str, help="Date to log as today (YYYY-MM-DD)")
    p_log.add_argument(
        "--save", action="store_true", help="Write the updated log back to profile.yaml"
    )
    p_log.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_log.set_defaults(func=cmd_calorie_log)

    return parser


def main() -> None:
    from nutriplan.log import setup_logging, stderr_console

    parser = build_parser()
    args = parser.parse_args()

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(level=args.log_level, log_file=log_file)

    try:
        args.func(args)
    except (OSError, ValueError) as e:
        stderr_console.print(f"[red]error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
