from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from kickoff.api import GameService, ServiceContext, ServiceError, live_view


def _print_json(data: Any, pretty: bool = True) -> None:
    if pretty:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    else:
        json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def _build_context(args: argparse.Namespace) -> ServiceContext:
    saves_dir = Path(getattr(args, "saves", "saves"))
    file_path = Path(args.file) if getattr(args, "file", None) else None
    return ServiceContext.from_paths(saves_dir, file_path)


def _service(args: argparse.Namespace) -> GameService:
    return GameService(_build_context(args))


def cmd_new(args: argparse.Namespace) -> None:
    ctx = _build_context(args)
    if args.seed is not None:
        ctx.config.seed = args.seed
    service = GameService(ctx)
    payload = {"teams": args.teams, "season": args.season, "human_index": args.human}
    _print_json(service.create(payload))


def cmd_advance(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.advance(args.days)
    service.save()
    _print_json(result)


def cmd_live_start(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.start_live(args.match)
    service.save()
    _print_json(result)


def cmd_live_tick(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.tick_live(args.minutes)
    service.save()
    _print_json(result)


def cmd_live_pause(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.pause_live()
    service.save()
    _print_json(result)


def cmd_live_resume(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.resume_live()
    service.save()
    _print_json(result)


def cmd_live_end(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.end_live()
    service.save()
    _print_json(result)


def cmd_live_play(args: argparse.Namespace) -> None:
    service = _service(args)

    def _echo(live) -> None:
        if args.follow:
            _print_json(live_view(live, last_lines=1), pretty=False)

    extra = {"sleep": lambda _s: None} if args.fast else {}
    result = service.run_live_match(on_tick=_echo, **extra)
    service.save()
    _print_json(result)


def cmd_training(args: argparse.Namespace) -> None:
    service = _service(args)
    result = service.train()
    service.save()
    _print_json(result)


def cmd_table(args: argparse.Namespace) -> None:
    _print_json(_service(args).table(args.league))


def cmd_news(args: argparse.Namespace) -> None:
    _print_json(_service(args).news(args.limit))


def cmd_next(args: argparse.Namespace) -> None:
    _print_json(_service(args).next_match())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kickoff", description="Football season simulator")
    parser.add_argument("--saves", default="saves")
    parser.add_argument("--file")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new")
    new.add_argument("--teams", type=int, default=8)
    new.add_argument("--season", type=int, default=2025)
    new.add_argument("--human", type=int, default=0)
    new.add_argument("--seed", type=int)
    new.set_defaults(func=cmd_new)

    advance = sub.add_parser("advance")
    advance.add_argument("--days", type=int, default=1)
    advance.set_defaults(func=cmd_advance)

    # live
    live = sub.add_parser("live")
    live_sub = live.add_subparsers(dest="action", required=True)
    live_start = live_sub.add_parser("start")
    live_start.add_argument("--match")
    live_start.set_defaults(func=cmd_live_start)
    live_tick = live_sub.add_parser("tick")
    live_tick.add_argument("--minutes", type=int, default=1)
    live_tick.set_defaults(func=cmd_live_tick)
    live_pause = live_sub.add_parser("pause")
    live_pause.set_defaults(func=cmd_live_pause)
    live_resume = live_sub.add_parser("resume")
    live_resume.set_defaults(func=cmd_live_resume)
    live_end = live_sub.add_parser("end")
    live_end.set_defaults(func=cmd_live_end)
    live_play = live_sub.add_parser("play")
    live_play.add_argument("--fast", action="store_true")
    live_play.add_argument("--follow", action="store_true")
    live_play.set_defaults(func=cmd_live_play)

    training = sub.add_parser("training")
    training.set_defaults(func=cmd_training)

    table = sub.add_parser("table")
    table.add_argument("--league")
    table.set_defaults(func=cmd_table)

    news = sub.add_parser("news")
    news.add_argument("--limit", type=int, default=10)
    news.set_defaults(func=cmd_news)

    nxt = sub.add_parser("next")
    nxt.set_defaults(func=cmd_next)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
        return 0
    except ServiceError as exc:
        _print_json({"ok": False, "error": {"code": "SERVICE_ERROR", "message": str(exc)}})
        return 1
    except json.JSONDecodeError as exc:
        _print_json({"ok": False, "error": {"code": "INVALID_SAVE", "message": str(exc)}})
        return 1
    except Exception as exc:  # pragma: no cover - unexpected failure
        _print_json({"ok": False, "error": {"code": "UNEXPECTED_ERROR", "message": str(exc)}})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
