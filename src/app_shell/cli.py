import argparse
import logging
import sys
from pathlib import Path

from src.app_shell.context import ServiceContext
from src.components.entitlement import evaluate_chapters
from src.domain.entities import User
from src.rules.loader import load_rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"

# Stand-in readers for simulating free and premium sessions
FREE_READER = User(id="cli-free", email="free@localhost", username="free")
PREMIUM_READER = User(
    id="cli-premium", email="premium@localhost", username="premium", is_premium=True
)


def get_context(rules_path: str, db_path: str | None) -> ServiceContext:
    if not Path(rules_path).exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    rules = load_rules(Path(rules_path))
    return ServiceContext.from_db(db_path or rules.storage.db_path, rules)


def reader_for(args: argparse.Namespace) -> User:
    return PREMIUM_READER if args.premium else FREE_READER


def handle_chapters(ctx: ServiceContext, args: argparse.Namespace) -> None:
    comic = ctx.catalog.get_comic(args.comic_id)
    if comic is None:
        logger.error(f"Comic {args.comic_id} not found.")
        sys.exit(1)

    chapters = ctx.catalog.list_chapters(comic.id)
    access = evaluate_chapters(chapters, reader_for(args), ctx.clock.now(), ctx.entitlement)

    print(f"{comic.title} ({'premium' if args.premium else 'free'} reader)")
    for chapter, result in zip(chapters, access.chapters, strict=True):
        state = "open" if result.can_access else "locked"
        label = f"  {result.label}" if result.label else ""
        print(f"  #{chapter.number:<3} {state:<7} {chapter.title}{label}")


def handle_ads(ctx: ServiceContext, args: argparse.Namespace) -> None:
    tracker = ctx.throttle.tracker()
    print(f"Chapters read: {tracker.chapters_read}")
    print(f"Last ad at:    {tracker.last_ad_shown}")

    for ad in ctx.catalog.list_active_ads():
        decision = ctx.throttle.evaluate(ad, is_premium=False)
        print(f"  {ad.id:<8} {ad.show_frequency:<8} {'due' if decision.show else 'waiting'}")


def handle_read(ctx: ServiceContext, args: argparse.Namespace) -> None:
    result = ctx.reading.open_chapter(args.comic_id, args.chapter_id, reader_for(args))
    if not result.opened:
        logger.error(f"Cannot open {args.chapter_id}: {result.reason}")
        sys.exit(1)

    print(f"Opened {args.chapter_id}.")
    if result.ad is not None:
        print(f"Ad: {result.ad.title} [{result.ad.button_text}]")
    if result.chapters_read is not None:
        print(f"Chapters read: {result.chapters_read}")


def handle_reset(ctx: ServiceContext, args: argparse.Namespace) -> None:
    ctx.reset_all()
    print("Catalog and ad tracker reset.")


HANDLERS = {
    "chapters": handle_chapters,
    "ads": handle_ads,
    "read": handle_read,
    "reset": handle_reset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manhwa Reader CLI")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("--db", help="SQLite store path (default from rules)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # chapters
    chapters_parser = subparsers.add_parser("chapters", help="List chapters with access")
    chapters_parser.add_argument("comic_id")
    chapters_parser.add_argument("--premium", action="store_true", help="As a premium reader")

    # ads
    subparsers.add_parser("ads", help="Show ad throttle state")

    # read
    read_parser = subparsers.add_parser("read", help="Simulate opening a chapter")
    read_parser.add_argument("comic_id")
    read_parser.add_argument("chapter_id")
    read_parser.add_argument("--premium", action="store_true", help="As a premium reader")

    # reset
    subparsers.add_parser("reset", help="Restore default catalog and zero the ad tracker")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    ctx = get_context(args.rules, args.db)
    try:
        HANDLERS[args.command](ctx, args)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
