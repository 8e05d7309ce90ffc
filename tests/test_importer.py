"""Tests for bulk alias import."""

import json
from pathlib import Path

import pytest

from mongodb_path.models.alias import LANGUAGE_NONE
from mongodb_path.repositories.alias_repo import AliasStore
from mongodb_path.repositories.sequence_repo import SequenceRepo
from mongodb_path.services.importer import PID_SEQUENCE, import_aliases, read_rows

ROWS = [
    {"pid": 10, "source": "node/10", "alias": "ten", "language": LANGUAGE_NONE},
    {"pid": 42, "source": "node/42", "alias": "answer", "language": "en", "dst": "legacy"},
    {"source": "user/1", "alias": "admin"},
]


class TestImportAliases:
    """Tests for import_aliases()."""

    @pytest.mark.asyncio
    async def test__imports_and_assigns_pids(self, store: AliasStore, sequences: SequenceRepo) -> None:
        report = await import_aliases(store, sequences, ROWS)

        assert report.imported == 3
        assert report.assigned == 1
        assert report.max_pid == 43
        assert await store.count() == 3
        # issued above every imported pid
        assert (await store.load({"source": "user/1"}))["pid"] == 43

    @pytest.mark.asyncio
    async def test__sequence_backfilled_past_imported_pids(self, store: AliasStore, sequences: SequenceRepo) -> None:
        report = await import_aliases(store, sequences, ROWS)

        next_pid = await sequences.next_id(PID_SEQUENCE)

        assert next_pid > 42
        assert next_pid == report.next_pid

    @pytest.mark.asyncio
    async def test__drop__replaces_existing(self, store: AliasStore, sequences: SequenceRepo) -> None:
        await store.save({"pid": 99, "source": "node/99", "alias": "old"})

        await import_aliases(store, sequences, ROWS[:1], drop=True)

        assert await store.load({"pid": 99}) is None
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test__no_drop__keeps_existing(self, store: AliasStore, sequences: SequenceRepo) -> None:
        await store.save({"pid": 99, "source": "node/99", "alias": "old"})

        report = await import_aliases(store, sequences, ROWS[:1], drop=False)

        assert await store.count() == 2
        assert report.max_pid == 99

    @pytest.mark.asyncio
    async def test__no_drop__issued_pid_does_not_replace_existing(
        self, store: AliasStore, sequences: SequenceRepo
    ) -> None:
        await store.save({"pid": 1, "source": "node/1", "alias": "keep-me"})

        await import_aliases(store, sequences, [{"source": "user/1", "alias": "admin"}], drop=False)

        assert (await store.load({"pid": 1}))["alias"] == "keep-me"
        assert (await store.load({"source": "user/1"}))["pid"] == 2
        assert await store.count() == 2

    @pytest.mark.asyncio
    async def test__pidless_row_before_explicit_pid__both_kept(
        self, store: AliasStore, sequences: SequenceRepo
    ) -> None:
        rows = [
            {"source": "user/1", "alias": "admin"},
            {"pid": 1, "source": "node/1", "alias": "one"},
        ]

        report = await import_aliases(store, sequences, rows)

        assert await store.count() == 2
        assert (await store.load({"pid": 1}))["alias"] == "one"
        assert (await store.load({"source": "user/1"}))["pid"] == 2
        assert report.next_pid == 3

    @pytest.mark.asyncio
    async def test__explicit_pids_only__next_pid_follows_max(
        self, store: AliasStore, sequences: SequenceRepo
    ) -> None:
        report = await import_aliases(store, sequences, ROWS[:2])

        assert report.max_pid == 42
        assert report.next_pid == 43
        assert await sequences.next_id(PID_SEQUENCE) == 43

    @pytest.mark.asyncio
    async def test__unknown_fields_stripped(self, store: AliasStore, sequences: SequenceRepo) -> None:
        await import_aliases(store, sequences, ROWS)

        stored = await store.col.find_one({"pid": 42})

        assert "dst" not in stored


class TestReadRows:
    """Tests for read_rows()."""

    def test__json_array(self, tmp_path: Path) -> None:
        dump = tmp_path / "aliases.json"
        dump.write_text(json.dumps(ROWS))

        assert read_rows(dump) == ROWS

    def test__json_lines(self, tmp_path: Path) -> None:
        dump = tmp_path / "aliases.jsonl"
        dump.write_text("\n".join(json.dumps(row) for row in ROWS) + "\n\n")

        assert read_rows(dump) == ROWS

    def test__empty_file(self, tmp_path: Path) -> None:
        dump = tmp_path / "empty.json"
        dump.write_text("")

        assert read_rows(dump) == []
