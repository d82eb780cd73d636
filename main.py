from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from mpt_parser.client import MptClient
from mpt_parser.config import get_settings
from mpt_parser.errors import MptError
from mpt_parser.fetch import PageFetcher


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract MPT college schedule data as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("week", help="Current week kind (numerator/denominator)")
    schedule = sub.add_parser("schedule", help="Weekly timetable")
    schedule.add_argument("--group", help="Only this group code")
    replacements = sub.add_parser("replacements", help="Replacement bulletin")
    replacements.add_argument("--group", help="Only this group code")
    day = sub.add_parser("day", help="Printable replacements for one date")
    day.add_argument("--date", type=date.fromisoformat, help="Date YYYY-MM-DD (default: today)")
    rng = sub.add_parser("range", help="Printable replacements for a date range")
    rng.add_argument("--start", type=date.fromisoformat, required=True, help="First date YYYY-MM-DD")
    rng.add_argument("--end", type=date.fromisoformat, help="End date YYYY-MM-DD, exclusive (default: tomorrow)")
    sub.add_parser("specialties", help="Specialty directory")
    site = sub.add_parser("site", help="Specialty micro-site")
    site.add_argument("name", help="Specialty code or (part of) its name")
    sub.add_parser("teachers", help="Staff directory")
    return parser.parse_args(argv)


def _filter_group(groups, name):
    return [group for group in groups if getattr(group, "name", None) == name or getattr(group, "group", None) == name]


def run(client: MptClient, args: argparse.Namespace):
    if args.command == "week":
        return client.get_current_week().value
    if args.command == "schedule":
        specialties = client.get_schedule()
        if args.group:
            return [g.to_dict() for s in specialties for g in _filter_group(s.groups, args.group)]
        return [s.to_dict() for s in specialties]
    if args.command == "replacements":
        days = client.get_replacements()
        if args.group:
            return [
                {"date": d.date.isoformat(), "groups": [g.to_dict() for g in _filter_group(d.groups, args.group)]}
                for d in days
            ]
        return [d.to_dict() for d in days]
    if args.command == "day":
        return [g.to_dict() for g in client.get_replacements_on_day(args.date or client.today())]
    if args.command == "range":
        return [d.to_dict() for d in client.iter_replacements(args.start, args.end)]
    if args.command == "specialties":
        return [s.to_dict() for s in client.get_specialties()]
    if args.command == "site":
        return client.get_specialty_site(args.name).to_dict()
    if args.command == "teachers":
        return [t.to_dict() for t in client.get_teachers()]
    raise ValueError(f"Unknown command {args.command}")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    settings = get_settings()
    try:
        with PageFetcher(settings) as fetcher:
            result = run(MptClient(fetcher, settings), args)
    except MptError as exc:
        logging.error("%s", exc)
        return 1

    json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
