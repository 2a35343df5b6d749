import argparse
import sys
from typing import List, Optional

from rdstail.main import Program


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdstail", description="Tail the database logs of an RDS instance"
    )
    parser.add_argument(
        "--instance",
        dest="instance",
        action="store",
        default="",
        help="RDS instance identifier",
    )
    parser.add_argument(
        "--since",
        dest="since",
        action="store",
        default="",
        help=(
            "Start from logs after this timestamp "
            "(format: 2006-01-02 15:04:05 or 2006-01-02T15:04:05Z) "
            "or duration (1h, 5m)"
        ),
    )
    parser.add_argument(
        "-f",
        "--follow",
        dest="follow",
        action="store_true",
        help="Follow log output",
    )
    parser.add_argument(
        "--region",
        dest="region",
        action="store",
        help="AWS region (default: from settings or the AWS environment)",
    )
    parser.add_argument(
        "--profile",
        dest="profile",
        action="store",
        help="AWS credentials profile (default: from settings or the AWS environment)",
    )
    parser.add_argument(
        "--interval",
        dest="interval",
        action="store",
        type=float,
        help="Seconds to wait between polls when following (default: 5)",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        action="store",
        help="Log files to tail - matched like a filesystem wildcard, eg. 'error/*'",
    )
    parser.add_argument(
        "--debug-log",
        dest="debug_log",
        action="store",
        help="Write debug logging to this file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    program = Program(args)

    try:
        return program.run()
    except KeyboardInterrupt:
        return 130


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
