"""Main entry point for the Insight CLI."""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import httpx

from insight_cli import __version__
from insight_cli.client import DEFAULT_API_URL, ApiClient, ApiError

COMMAND_ARITY = {
    "add": 3,
    "remove": 1,
    "list": 0,
    "query": 1,
}


def print_help():
    """Print help message."""
    print(f"""
Insight CLI v{__version__}

Usage:
  insight [options] <command> [args]

Commands:
  add <id> <kind> <zip>   Upload a dataset archive (kind: courses)
  remove <id>             Remove a dataset
  list                    List installed datasets
  query <file.json>       Run the query stored in a JSON file ("-" reads stdin)

Options:
  --api-url URL     Override API endpoint (default: {DEFAULT_API_URL})
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  INSIGHT_API_URL   Override API endpoint (the --api-url flag wins)
""")


def resolve_api_url(flag: str | None) -> str:
    """--api-url flag, then INSIGHT_API_URL, then the default."""
    if flag:
        return flag.rstrip("/")
    env_url = os.environ.get("INSIGHT_API_URL")
    if env_url:
        return env_url.rstrip("/")
    return DEFAULT_API_URL


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (add, remove, list, query)
        params: list[str]
        api_url: str | None
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "params": [],
        "api_url": None,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-") and arg != "-":
            print(f"Unknown option: {arg}")
            print("Run 'insight --help' for usage.")
            sys.exit(1)
        elif result["command"] is None:
            if arg not in COMMAND_ARITY:
                print(f"Unknown command: {arg}")
                print("Run 'insight --help' for usage.")
                sys.exit(1)
            result["command"] = arg
        else:
            result["params"].append(arg)

        i += 1

    command = result["command"]
    if command is not None and len(result["params"]) != COMMAND_ARITY[command]:
        print(f"Error: '{command}' takes {COMMAND_ARITY[command]} argument(s)")
        sys.exit(1)

    return result


def run_command(client: ApiClient, command: str, params: list[str]):
    """Execute one command and return the decoded result."""
    if command == "add":
        dataset_id, kind, path = params
        return client.add_dataset(dataset_id, kind, Path(path).read_bytes())
    if command == "remove":
        return client.remove_dataset(params[0])
    if command == "list":
        return client.list_datasets()
    if command == "query":
        source = sys.stdin.read() if params[0] == "-" else Path(params[0]).read_text()
        return client.query(json.loads(source))
    raise ValueError(f"Unknown command: {command}")


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"insight-cli {__version__}")
        return

    if args["command"] is None:
        print_help()
        sys.exit(1)

    client = ApiClient(resolve_api_url(args["api_url"]))
    try:
        result = run_command(client, args["command"], args["params"])
    except ApiError as e:
        print(f"Error ({e.status_code}): {e.message}")
        sys.exit(1)
    except httpx.HTTPError as e:
        print(f"Error: could not reach {client.api_url} ({e})")
        sys.exit(1)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        client.close()

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
