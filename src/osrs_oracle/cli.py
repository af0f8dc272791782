"""Command line interface for OSRS Oracle."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from osrs_oracle import __version__
from osrs_oracle.config import load_config
from osrs_oracle.domain.errors import OracleError
from osrs_oracle.domain.models import AppMode, RequestConfig, TopicCategory
from osrs_oracle.llm.credentials import EnvCredentialProvider
from osrs_oracle.llm.gemini_client import build_client
from osrs_oracle.logging import configure_logging, get_logger, get_run_id
from osrs_oracle.services import chat_service, health_service, speech_service, tool_service
from osrs_oracle.services.media_adapter import decode_data_uri, encode_upload
from osrs_oracle.tools import ToolInput
from osrs_oracle.tools.image import IMAGE_SIZES
from osrs_oracle.tools.video import ASPECT_RATIOS


logger = get_logger(__name__)


def _print(payload: dict, *, file=None) -> None:
    print(json.dumps(payload, indent=2, default=str), file=file or sys.stdout)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OSRS Oracle CLI")
    parser.add_argument("--version", action="version", version=f"osrs-oracle {__version__}")
    parser.add_argument("--config", type=Path, help="Path to a YAML config file")
    subparsers = parser.add_subparsers(dest="command")

    ask_parser = subparsers.add_parser("ask", help="Ask the Oracle a question")
    ask_parser.add_argument("question", help="Question to ask")
    ask_parser.add_argument("--no-search", action="store_true", help="Disable wiki-grounded search")
    ask_parser.add_argument("--thinking", action="store_true", help="Use extended reasoning (disables search)")
    ask_parser.add_argument(
        "--category",
        choices=[c.value for c in TopicCategory],
        default=TopicCategory.GENERAL.value,
        help="Topic category hint",
    )
    ask_parser.set_defaults(func=_ask_handler)

    image_parser = subparsers.add_parser("image", help="Generate concept art")
    image_parser.add_argument("prompt")
    image_parser.add_argument("--size", choices=IMAGE_SIZES, default="1K")
    image_parser.add_argument("--out", type=Path, help="Write the PNG here")
    image_parser.set_defaults(func=_image_handler)

    edit_parser = subparsers.add_parser("edit", help="Edit an image")
    edit_parser.add_argument("image", type=Path)
    edit_parser.add_argument("prompt")
    edit_parser.add_argument("--out", type=Path, help="Write the PNG here")
    edit_parser.set_defaults(func=_edit_handler)

    video_parser = subparsers.add_parser("video", help="Generate an animation with Veo")
    video_parser.add_argument("prompt")
    video_parser.add_argument("--aspect", choices=ASPECT_RATIOS, default="16:9")
    video_parser.add_argument("--image", type=Path, help="Optional seed image")
    video_parser.set_defaults(func=_video_handler)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze an image or video")
    analyze_parser.add_argument("file", type=Path)
    analyze_parser.add_argument("prompt", nargs="?", default="")
    analyze_parser.set_defaults(func=_analyze_handler)

    speak_parser = subparsers.add_parser("speak", help="Read text aloud (markup is stripped)")
    speak_parser.add_argument("text")
    speak_parser.add_argument("--out", type=Path, required=True, help="Write a WAV file here")
    speak_parser.set_defaults(func=_speak_handler)

    doctor_parser = subparsers.add_parser("doctor", help="Check API key and backend reachability")
    doctor_parser.add_argument("--offline", action="store_true", help="Skip the live backend call")
    doctor_parser.set_defaults(func=_doctor_handler)

    return parser


def main(argv: Optional[list] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return

    config = load_config(args.config)
    configure_logging(config.logging.level)
    logger.info("Starting CLI", extra={"run_id": get_run_id(), "command": args.command, "env": config.app.environment})
    args.func(args)


def _write_data_uri(data_uri: str, out: Optional[Path]) -> dict:
    if out is None:
        return {"media_uri_chars": len(data_uri)}
    out.write_bytes(decode_data_uri(data_uri))
    return {"path": str(out)}


def _run_tool(args: argparse.Namespace, mode: AppMode, inputs: ToolInput) -> tool_service.ToolOutcome:
    cfg = load_config(args.config)
    client = build_client(cfg)
    outcome = asyncio.run(tool_service.run_tool(mode, inputs, client, cfg))
    if not outcome.ok:
        _print({"mode": mode.value, "error": outcome.error}, file=sys.stderr)
        sys.exit(1)
    return outcome


def _ask_handler(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    client = build_client(cfg)
    request_config = RequestConfig(
        search_enabled=not args.no_search,
        extended_reasoning_enabled=args.thinking,
        topic_category=TopicCategory(args.category),
    )
    try:
        answer = asyncio.run(chat_service.submit_chat(client, args.question, request_config, [], cfg.gemini))
    except OracleError as exc:
        _print({"error": str(exc), "error_type": type(exc).__name__}, file=sys.stderr)
        sys.exit(1)
    _print({"answer": answer.text, "sources": [{"title": s.title, "uri": s.uri} for s in answer.sources]})


def _image_handler(args: argparse.Namespace) -> None:
    outcome = _run_tool(args, AppMode.IMAGE_GEN, ToolInput(prompt=args.prompt, image_size=args.size))
    _print({"mode": AppMode.IMAGE_GEN.value, **_write_data_uri(outcome.result.media_uri, args.out)})


def _read_upload(path: Optional[Path]):
    if path is None:
        return None
    try:
        return asyncio.run(encode_upload(path))
    except OracleError as exc:
        _print({"error": str(exc)}, file=sys.stderr)
        sys.exit(1)


def _edit_handler(args: argparse.Namespace) -> None:
    upload = _read_upload(args.image)
    outcome = _run_tool(args, AppMode.IMAGE_EDIT, ToolInput(prompt=args.prompt, upload=upload))
    _print({"mode": AppMode.IMAGE_EDIT.value, **_write_data_uri(outcome.result.media_uri, args.out)})


def _video_handler(args: argparse.Namespace) -> None:
    upload = _read_upload(args.image)
    inputs = ToolInput(prompt=args.prompt, aspect_ratio=args.aspect, upload=upload)
    outcome = _run_tool(args, AppMode.VIDEO_GEN, inputs)
    _print({"mode": AppMode.VIDEO_GEN.value, "path": str(outcome.result.media_file.path)})


def _analyze_handler(args: argparse.Namespace) -> None:
    upload = _read_upload(args.file)
    outcome = _run_tool(args, AppMode.ANALYZE, ToolInput(prompt=args.prompt, upload=upload))
    _print({"mode": AppMode.ANALYZE.value, "text": outcome.result.text})


def _speak_handler(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    client = build_client(cfg)
    try:
        audio = asyncio.run(speech_service.speak(client, args.text, voice=cfg.speech.voice))
    except OracleError as exc:
        _print({"error": str(exc)}, file=sys.stderr)
        sys.exit(1)
    args.out.write_bytes(audio.to_wav_bytes())
    _print({"path": str(args.out), "mime_type": audio.mime_type})


def _doctor_handler(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    provider = EnvCredentialProvider(env_var=cfg.gemini.api_key_env)
    client = build_client(cfg, provider)
    results = asyncio.run(health_service.run_all_checks(client, provider, include_backend=not args.offline))
    _print(results)
    if not all(r.get("ok") for r in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
