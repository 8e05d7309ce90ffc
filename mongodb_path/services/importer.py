import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from loguru import logger
from pydantic import BaseModel

from mongodb_path.repositories.alias_repo import AliasStore
from mongodb_path.repositories.sequence_repo import SequenceRepo

# Sequence issuing pids for aliases created after an import.
PID_SEQUENCE = "path_alias_pid"


class ImportReport(BaseModel):
    imported: int = 0
    # rows that came without a pid and got one from the sequence
    assigned: int = 0
    max_pid: int = 0
    # first pid the sequence will hand out after this import
    next_pid: int = 0


def read_rows(path: Path) -> List[Dict[str, Any]]:
    """Load alias rows from a JSON array or a JSON-lines file."""
    text = Path(path).read_text(encoding="utf-8").strip()
    if not text:
        return []
    if text.startswith("["):
        return json.loads(text)
    return [json.loads(line) for line in text.splitlines() if line.strip()]


async def import_aliases(
    store: AliasStore,
    sequences: SequenceRepo,
    rows: Iterable[Dict[str, Any]],
    drop: bool = True,
) -> ImportReport:
    if drop:
        await store.reset()
    else:
        await store.ensure_schema()

    report = ImportReport()
    rows = list(rows)
    explicit = [row for row in rows if row.get("pid") is not None]
    pending = [row for row in rows if row.get("pid") is None]

    # Rows carrying a pid go first so issued pids can be kept above all of them.
    for row in explicit:
        record, _ = await store.save(row)
        report.imported += 1
        report.max_pid = max(report.max_pid, record["pid"])

    # Upserts are keyed by pid: an issued pid must never match a stored one.
    floor = max(report.max_pid, await store.max_pid())
    for row in pending:
        floor = await sequences.next_id(PID_SEQUENCE, existing_max=floor)
        await store.save({**row, "pid": floor})
        report.imported += 1
        report.assigned += 1
    report.max_pid = floor

    # Bring the counter up to max_pid (without skipping a value) so the next
    # issued pid is above everything stored.
    if await sequences.current(PID_SEQUENCE) < report.max_pid:
        await sequences.next_id(PID_SEQUENCE, existing_max=report.max_pid - 1)
    report.next_pid = await sequences.current(PID_SEQUENCE) + 1
    logger.info(
        "Imported {} alias(es) into {} ({} pid(s) assigned, max pid {})",
        report.imported, store.name, report.assigned, report.max_pid,
    )
    return report
