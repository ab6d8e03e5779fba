"""Command line entry point for assetdeploy."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from assetdeploy.bootstrap import bootstrap
from assetdeploy.domain.assets import AssetParams
from assetdeploy.domain.errors import AssetDeployError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assetdeploy",
        description="Publish staged static assets into the public tree.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    deploy = sub.add_parser("deploy", help="Publish staged assets")
    deploy.add_argument("names", nargs="+", help="Logical asset names")
    deploy.add_argument("--area", default="")
    deploy.add_argument("--theme", default="")
    deploy.add_argument("--locale", default="")
    deploy.add_argument("--module", default="")

    delete = sub.add_parser("delete", help="Delete public paths")
    delete.add_argument("paths", nargs="+", help="Paths relative to the public root")

    read = sub.add_parser("read", help="Print a published asset")
    read.add_argument("name")
    read.add_argument("directory")

    write_tmp = sub.add_parser("write-tmp", help="Write a file into the staging area")
    write_tmp.add_argument("name")
    write_tmp.add_argument("directory")
    write_tmp.add_argument("content")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    service = bootstrap()

    if args.command == "deploy":
        params = AssetParams(area=args.area, theme=args.theme, locale=args.locale, module=args.module)
        report = service.deploy_files(args.names, params)
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.ok else 1

    if args.command == "delete":
        report = service.delete_files(args.paths)
        print(json.dumps(report.to_dict(), indent=2))
        return 0 if report.ok else 1

    try:
        if args.command == "read":
            content = service.read_file(args.name, args.directory)
            if content is None:
                print(f"not found: {args.name}", file=sys.stderr)
                return 1
            sys.stdout.buffer.write(content)
            sys.stdout.flush()
            return 0

        written = service.write_tmp_file(args.name, args.directory, args.content)
        print(json.dumps({"bytes_written": written}))
        return 0
    except AssetDeployError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
