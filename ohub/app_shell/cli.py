import argparse
import json
import logging
import sys
from dataclasses import asdict

import uvicorn

from ohub.api.deps import (
    get_content_service,
    get_content_source,
    get_renderer,
    get_rules,
    get_settings,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def handle_serve(args: argparse.Namespace) -> None:
    uvicorn.run(
        "ohub.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=get_settings().log_level.lower(),
    )


def handle_check_rules() -> None:
    rules = get_rules()
    print(f"Rules OK: {rules.project.slug} v{rules.project.rules_version}")


def handle_check_contentful() -> int:
    rules = get_rules()
    service = get_content_service(
        source=get_content_source(), renderer=get_renderer(rules), rules=rules
    )
    report = service.check_connection()
    print(json.dumps(asdict(report), indent=2))
    return 0 if report.status == "success" else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="OHUB site CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the web server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # check-rules
    subparsers.add_parser("check-rules", help="Validate the rules file")

    # check-contentful
    subparsers.add_parser("check-contentful", help="Test the Contentful connection")

    args = parser.parse_args(argv)

    try:
        if args.command == "check-rules":
            handle_check_rules()
        elif args.command == "check-contentful":
            return handle_check_contentful()
        elif args.command == "serve":
            get_rules()
            handle_serve(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Rules load failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
