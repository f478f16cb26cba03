"""
Command line access to the Ed Discussion API.

    python -m ed_discussion user
    python -m ed_discussion threads 1234 --limit 50 --filter unresolved
    python -m ed_discussion thread 987654
    python -m ed_discussion thread-number 1234 42

The token and base URL come from ED_API_TOKEN / ED_BASE_URL (or a .env file).
Each command prints the decoded resource re-encoded as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .clients import ClientConfig, EdClient, EdError
from .model.codecs import OpenEnum
from .model.enums import FilterKey, SortKey
from .model.ids import CourseID, ThreadID
from .options import GetCourseThreadsOptions


def _non_negative(text: str) -> int:
    """argparse type for IDs and thread numbers"""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ed_discussion", description="Query the Ed Discussion API")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests at DEBUG level")
    parser.add_argument("--env-file", help="read configuration from this .env file")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("user", help="the user owning the API token")

    threads = commands.add_parser("threads", help="one page of a course's threads")
    threads.add_argument("course_id", type=_non_negative)
    threads.add_argument("--limit", type=int, default=20)
    threads.add_argument("--offset", type=int, default=0)
    threads.add_argument("--sort", default=SortKey.NEW.value)
    threads.add_argument("--filter", default=None)

    thread = commands.add_parser("thread", help="a thread by its global ID")
    thread.add_argument("thread_id", type=_non_negative)

    by_number = commands.add_parser("thread-number", help="a thread by its number within a course")
    by_number.add_argument("course_id", type=_non_negative)
    by_number.add_argument("number", type=_non_negative)
    return parser


async def run(args: argparse.Namespace, config: ClientConfig):
    async with EdClient.from_config(config) as client:
        if args.command == "user":
            return await client.get_self_user()
        if args.command == "threads":
            options = GetCourseThreadsOptions(
                limit=args.limit,
                offset=args.offset,
                sort=OpenEnum(SortKey).decode(args.sort),
                filter=OpenEnum(FilterKey).decode(args.filter) if args.filter else None,
            )
            return await client.get_course_threads(CourseID(args.course_id), options)
        if args.command == "thread":
            return await client.get_thread(ThreadID(args.thread_id))
        return await client.get_thread_by_number(CourseID(args.course_id), args.number)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    try:
        config = ClientConfig.from_env(args.env_file)
        resource = asyncio.run(run(args, config))
    except EdError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(resource.to_wire(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
