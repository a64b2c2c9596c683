"""Command line entry point for operating a local vocabulary store."""
import argparse
import logging
import sys
from typing import List, Optional

from mongolvocab.app import VocabApp
from mongolvocab.config import ensure_directories, settings
from mongolvocab.data.packs import get_pack_meta
from mongolvocab.logging_config import setup_logging
from mongolvocab.models.vocab_models import UpgradeMode
from mongolvocab.monitoring import start_monitoring

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mongolvocab", description="Mongolian vocabulary store tools")
    parser.add_argument("--backend", choices=("auto", "sql", "kv"), help="Override STORAGE_BACKEND")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("status", help="Show streak, progress and dictionary size")
    commands.add_parser("packs", help="List content packs and their status")

    accept = commands.add_parser("accept", help="Accept a pack at its current version")
    accept.add_argument("pack_id")

    dismiss = commands.add_parser("dismiss", help="Dismiss a pack at its current version")
    dismiss.add_argument("pack_id")

    upgrade = commands.add_parser("upgrade", help="Upgrade an accepted pack to its current version")
    upgrade.add_argument("pack_id")
    upgrade.add_argument("--mode", choices=[m.value for m in UpgradeMode], default=UpgradeMode.NEW_WORDS.value)
    return parser


def show_status(app: VocabApp) -> None:
    data = app.streak.get_streak_data()
    print(f"Storage:         {app.storage.name}")
    print(f"Words:           {len(app.dictionary.resolve())}")
    print(f"Current streak:  {data.current_streak}")
    print(f"Longest streak:  {data.longest_streak}")
    print(f"Freeze:          {'available' if data.streak_freeze_available else 'used'}")
    print(f"Completed today: {app.progress.words_completed_today()}")
    print(f"Pending packs:   {app.packs.get_pending_pack_count()}")
    week = "  ".join(
        f"{day.day_label}:{app.streak.day_status(day.date, data).value}"
        for day in app.streak.get_week_days()
    )
    print(f"Week:            {week}")


def show_packs(app: VocabApp) -> None:
    for state in app.packs.get_pack_states():
        accepted = f" (accepted v{state.accepted_version})" if state.accepted_version else ""
        print(f"{state.pack.id:24} v{state.pack.version}  {state.status.value:18}{accepted}  {state.pack.title}")


def run(args: argparse.Namespace, app: VocabApp) -> int:
    if args.command == "status":
        show_status(app)
        return 0
    if args.command == "packs":
        show_packs(app)
        return 0

    meta = get_pack_meta(args.pack_id)
    if meta is None:
        print(f"Unknown pack: {args.pack_id}", file=sys.stderr)
        return 1

    if args.command == "accept":
        app.packs.accept_pack(meta.id, meta.version)
    elif args.command == "dismiss":
        app.packs.dismiss_pack(meta.id, meta.version)
    elif args.command == "upgrade":
        if app.packs.is_pack_accepted(meta.id) is None:
            print(f"Pack {meta.id} is not accepted", file=sys.stderr)
            return 1
        result = app.packs.upgrade_pack(meta.id, meta.version, UpgradeMode(args.mode))
        print(
            f"Kept as custom: {result.added_custom}, overrides removed: {result.removed_overrides}, "
            f"deletions restored: {result.restored_deletes}, confidences reset: {result.reset_confidences}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    ensure_directories()
    setup_logging("Starting mongolvocab ...")

    if args.backend:
        settings.storage.backend = args.backend
    if settings.monitoring.enabled:
        start_monitoring(settings.monitoring.port)
        logger.info(f"Metrics served on port {settings.monitoring.port}")

    app = VocabApp(settings)
    try:
        return run(args, app)
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
