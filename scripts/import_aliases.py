# scripts/import_aliases.py
# Usage: python -m scripts.import_aliases --file aliases.json [--no-drop]
import argparse
import asyncio
from pathlib import Path

from rich.console import Console

from mongodb_path.core.logger_config import configure_logging
from mongodb_path.db.mongo import close_client, get_db
from mongodb_path.repositories.alias_repo import AliasStore
from mongodb_path.repositories.sequence_repo import SequenceRepo
from mongodb_path.services.importer import import_aliases, read_rows


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Import path aliases from a JSON / JSON-lines dump into MongoDB")
    ap.add_argument("--file", required=True, type=Path, help="JSON array or JSON-lines file of alias rows")
    ap.add_argument(
        "--drop",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Drop existing aliases before importing (default: yes)",
    )
    ap.add_argument("--log-level", default=None)
    return ap.parse_args(argv)


async def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)
    console = Console()

    rows = read_rows(args.file)
    db = get_db()
    try:
        report = await import_aliases(AliasStore(db), SequenceRepo(db), rows, drop=args.drop)
    finally:
        close_client()

    console.print(
        f"Imported [bold]{report.imported}[/bold] aliases "
        f"({report.assigned} new pids, max pid {report.max_pid}, next pid {report.next_pid})."
    )

if __name__ == "__main__":
    asyncio.run(main())
