"""
comfyctl: command-line access to the proxy.

    comfyctl prompt queue --workflow sdxl --set 3.inputs.seed=42 --param text_positive="a cat"
    comfyctl prompt queue --file ./my_graph.json --dry-run
    comfyctl serve
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv

from .adapters.comfyui_client import ComfyUIClient
from .config import ProxyConfig, load_config
from .features.overrides.applier import apply_overrides
from .features.overrides.bundle import OverrideBundle
from .features.overrides.envelope import wrap_envelope
from .features.workflows.store import WorkflowStore
from .shared import ErrorCode, Result, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="comfyctl", description="CLI for ComfyUI API Proxy")
    parser.add_argument("--comfyui-url", default=None, help="Override COMFYUI_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    prompt = sub.add_parser("prompt", help="Prompt-related commands")
    prompt_sub = prompt.add_subparsers(dest="prompt_command", required=True)
    queue = prompt_sub.add_parser("queue", help="Queue a workflow prompt to ComfyUI")
    source = queue.add_mutually_exclusive_group(required=True)
    source.add_argument("--workflow", help="Workflow name under PROMPTS_DIR/<name>.json")
    source.add_argument("--file", metavar="PATH", help="Explicit path to a workflow JSON file")
    queue.add_argument("--set", dest="sets", action="append", default=[], metavar="PATH=VALUE")
    queue.add_argument("--param", dest="params", action="append", default=[], metavar="KEY=VALUE")
    queue.add_argument("--filename-prefix", default=None)
    queue.add_argument("--dry-run", action="store_true", help="Print the request body instead of queueing it")
    queue.add_argument("--verbose", action="store_true")

    sub.add_parser("serve", help="Run the HTTP API")
    return parser


def _load_document(args: argparse.Namespace, config: ProxyConfig) -> Result[Any]:
    if args.workflow:
        return WorkflowStore(config.prompts_dir).load(args.workflow)
    path = Path(args.file)
    try:
        return Result.Ok(json.loads(path.read_text(encoding="utf-8")))
    except OSError as exc:
        return Result.Err(ErrorCode.WORKFLOW_NOT_FOUND, f"Failed to read workflow file: {exc}")
    except ValueError as exc:
        return Result.Err(ErrorCode.PARSE_ERROR, f"Failed to parse workflow JSON: {exc}")


def _fail(res: Result[Any], exit_code: int = EXIT_FAILURE) -> int:
    print(f"Error: {res.error}", file=sys.stderr)
    return exit_code


def _queue(args: argparse.Namespace, config: ProxyConfig) -> int:
    bundle = OverrideBundle.from_cli(
        sets=args.sets,
        params=args.params,
        filename_prefix=args.filename_prefix,
        default_prefix=config.default_filename_prefix,
        verbose=args.verbose,
    )
    if not bundle.ok or bundle.data is None:
        return _fail(bundle, EXIT_USAGE)

    document = _load_document(args, config)
    if not document.ok:
        return _fail(document)

    applied = apply_overrides(wrap_envelope(document.data), bundle.data)
    if not applied.ok or applied.data is None:
        return _fail(applied)
    for warning in applied.meta.get("warnings") or []:
        print(f"Warning: {warning}", file=sys.stderr)

    if args.dry_run:
        print(json.dumps(applied.data, indent=2, ensure_ascii=False))
        return EXIT_OK

    async def _submit() -> Result[Any]:
        async with ComfyUIClient(config.comfyui_url, timeout=config.http_timeout) as client:
            return await client.queue_prompt(applied.data)

    queued = asyncio.run(_submit())
    if not queued.ok:
        return _fail(queued)
    print(json.dumps(queued.data, indent=2, ensure_ascii=False))
    return EXIT_OK


def _serve(config: ProxyConfig) -> int:
    from aiohttp import web

    from .routes import build_app

    for key, value in config.describe().items():
        logger.info("%s: %s", key, value)
    logger.info("listening on %s:%s", config.api_host, config.api_port)
    web.run_app(build_app(config), host=config.api_host, port=config.api_port, print=None)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = load_config()
    if args.comfyui_url:
        config = replace(config, comfyui_url=args.comfyui_url.rstrip("/"))

    if args.command == "serve":
        return _serve(config)
    return _queue(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
