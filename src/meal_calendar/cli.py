"""CLI entry point for the meal calendar."""

from __future__ import annotations

import argparse
from pathlib import Path

from meal_calendar.config import DEFAULT_CONFIG_DIR


def get_config_dir(args: argparse.Namespace) -> Path:
    return Path(args.config_dir) if args.config_dir else DEFAULT_CONFIG_DIR


def view_overrides(args: argparse.Namespace) -> dict:
    """Collect view option flags; unset flags stay None so config wins."""
    return {
        "show_added_by": True if args.show_added_by else None,
        "show_added_on": True if args.show_added_on else None,
        "show_recipe_title": False if args.hide_recipe_title else None,
        "group_similar": False if args.no_group_similar else None,
        "timezone": args.timezone,
    }


def cmd_month(args: argparse.Namespace) -> None:
    from meal_calendar.render import run_month

    run_month(
        plan_file=Path(args.plan_file),
        config_dir=get_config_dir(args),
        month=args.month,
        today=args.today,
        steps_next=args.next,
        steps_prev=args.prev,
        output_format=args.format,
        **view_overrides(args),
    )


def cmd_day(args: argparse.Namespace) -> None:
    from meal_calendar.render import run_day

    run_day(
        plan_file=Path(args.plan_file),
        config_dir=get_config_dir(args),
        day=args.date,
        today=args.today,
        output_format=args.format,
        **view_overrides(args),
    )


def add_view_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("plan_file", type=str, help="Meal plan JSON or YAML file")
    parser.add_argument(
        "--today", type=str, help="Override today's date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--show-added-by", action="store_true", help="Show who added each item"
    )
    parser.add_argument(
        "--show-added-on", action="store_true", help="Show when each item was added"
    )
    parser.add_argument(
        "--hide-recipe-title",
        action="store_true",
        help="Do not show linked recipe titles",
    )
    parser.add_argument(
        "--no-group-similar",
        action="store_true",
        help="List repeated items separately",
    )
    parser.add_argument(
        "--timezone", type=str, help="IANA timezone for scheduled timestamps"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meal-calendar",
        description="Month calendar view of a meal plan",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help=f"Directory holding meal-calendar.yaml (default: {DEFAULT_CONFIG_DIR})",
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

    # month
    p_month = sub.add_parser("month", help="Show a month of the meal plan")
    add_view_arguments(p_month)
    p_month.add_argument("--month", type=str, help="YYYY-MM (default: this month)")
    p_month.add_argument(
        "--next", type=int, default=0, help="Move forward N months"
    )
    p_month.add_argument(
        "--prev", type=int, default=0, help="Move back N months"
    )
    p_month.add_argument(
        "--format", type=str, choices=["table", "markdown", "json"], default="table"
    )
    p_month.set_defaults(func=cmd_month)

    # day
    p_day = sub.add_parser("day", help="Show the items planned for one day")
    add_view_arguments(p_day)
    p_day.add_argument("--date", type=str, help="YYYY-MM-DD (default: today)")
    p_day.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_day.set_defaults(func=cmd_day)

    return parser


def main() -> None:
    from meal_calendar.log import setup_logging

    parser = build_parser()
    args = parser.parse_args()

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(level=args.log_level, log_file=log_file)

    args.func(args)


if __name__ == "__main__":
    main()
