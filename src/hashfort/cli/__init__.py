"""HashFort CLI — run the server or hash/verify from the terminal."""

import argparse
import asyncio
import getpass
import json
import logging
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s — %(message)s"


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``hashfort`` console script."""
    parser = argparse.ArgumentParser(prog="hashfort", description="HashFort CLI")
    sub = parser.add_subparsers(dest="command")

    serve_cmd = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    serve_cmd.add_argument(
        "--workers", type=int, default=None,
        help="Maximum concurrent Argon2 invocations (default: min(4, cpus))",
    )
    serve_cmd.add_argument(
        "--timeout", type=float, default=30.0,
        help="Per-call hashing budget in seconds (0 disables)",
    )
    serve_cmd.add_argument("--log-level", default="info")

    hash_cmd = sub.add_parser("hash", help="Hash a password read from the terminal")
    hash_cmd.add_argument("--time-cost", type=int)
    hash_cmd.add_argument("--memory-cost", type=int)
    hash_cmd.add_argument("--parallelism", type=int)
    hash_cmd.add_argument("--salt-length", type=int)

    verify_cmd = sub.add_parser("verify", help="Verify a password read from the terminal")
    verify_cmd.add_argument("hash", help="Encoded Argon2 hash")

    sub.add_parser("config", help="Print default options and limits as JSON")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        _serve(args)
        return

    from hashfort.core.errors import HashFortError

    try:
        _run(args)
    except HashFortError as e:
        print(f"error: {e.message}", file=sys.stderr)
        sys.exit(2)


def _run(args: argparse.Namespace) -> None:
    if args.command == "hash":
        options = {
            "time_cost": args.time_cost,
            "memory_cost": args.memory_cost,
            "parallelism": args.parallelism,
            "salt_length": args.salt_length,
        }
        print(asyncio.run(_hash(getpass.getpass("Password to hash: "), options)))
    elif args.command == "verify":
        is_valid = asyncio.run(_verify(args.hash, getpass.getpass("Password: ")))
        print("valid" if is_valid else "invalid")
        sys.exit(0 if is_valid else 1)
    elif args.command == "config":
        from hashfort.core.descriptor import get_config

        print(json.dumps(get_config().model_dump(), indent=2))


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from hashfort import HashFort

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT, stream=sys.stdout)
    hf = HashFort(max_workers=args.workers, hash_timeout=args.timeout or None)
    uvicorn.run(hf.create_app(), host=args.host, port=args.port, log_level=args.log_level)


async def _hash(password: str, options: dict) -> str:
    from hashfort import HashFort

    hf = HashFort(max_workers=1, hash_timeout=None)
    try:
        return await hf.hash(password, options)
    finally:
        hf.dispose()


async def _verify(hash_string: str, password: str) -> bool:
    from hashfort import HashFort

    hf = HashFort(max_workers=1, hash_timeout=None)
    try:
        return await hf.verify(hash_string, password)
    finally:
        hf.dispose()
