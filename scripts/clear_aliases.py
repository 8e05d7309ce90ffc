# scripts/clear_aliases.py
# Usage: python -m scripts.clear_aliases --yes
import argparse
import asyncio

from rich.console import Console

from mongodb_path.core.logger_config import configure_logging
from mongodb_path.db.mongo import close_client, get_db
from mongodb_path.repositories.alias_repo import AliasStore


async def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Delete every path alias and rebuild the alias indexes")
    ap.add_argument("--yes", action="store_true", help="Confirm: this cannot be undone")
    args = ap.parse_args(argv)
    configure_logging()
    console = Console()

    if not args.yes:
        console.print("Are you sure you want to delete all path aliases? Re-run with [bold]--yes[/bold].")
        return 1

    store = AliasStore(get_db())
    try:
        await store.reset()
    finally:
        close_client()
    console.print(f"Alias collection [bold]{store.name}[/bold] cleared.")
    return 0

if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
