from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from mongodb_path.models.alias import LANGUAGE_NONE, first_segment
from mongodb_path.repositories.alias_repo import AliasStore

SortSpec = List[Tuple[str, int]]


def candidate_languages(language: str) -> List[str]:
    # Neutral aliases are always eligible alongside the requested language.
    if language == LANGUAGE_NONE:
        return [LANGUAGE_NONE]
    return [LANGUAGE_NONE, language]


def sort_spec(language: str, first_pass: bool) -> SortSpec:
    """
    Order for alias rows, mirroring the relational ORDER BY it replaces.

    | pass       | language vs LANGUAGE_NONE | language | pid  |
    |------------|---------------------------|----------|------|
    | first      | <=                        | asc      | asc  |
    | first      | >                         | desc     | asc  |
    | refinement | >=                        | desc     | desc |
    | refinement | <                         | asc      | desc |

    The language direction puts the requested language's rows before the
    neutral ones; first pass prefers the oldest alias, refinement the newest.
    """
    if first_pass:
        if language <= LANGUAGE_NONE:
            return [("language", 1), ("pid", 1)]
        return [("language", -1), ("pid", 1)]
    if language >= LANGUAGE_NONE:
        return [("language", -1), ("pid", -1)]
    return [("language", 1), ("pid", -1)]


def filter_whitelisted(paths: Iterable[str], whitelist: Mapping[str, int]) -> List[str]:
    return [p for p in paths if first_segment(p) in whitelist]


class AliasResolver:
    """Source <-> alias lookups with language fallback on top of an AliasStore."""

    def __init__(self, store: AliasStore):
        self.store = store

    async def lookup_aliases(
        self,
        paths: Iterable[str],
        language: str,
        first_pass: bool = False,
        whitelist: Optional[Mapping[str, int]] = None,
    ) -> Dict[str, str]:
        """
        Map each source in `paths` to its best alias for `language`.

        First pass (batch): every source keeps its best-ranked row. Refinement
        pass: only the single best-ranked row across all paths is kept.
        Sources without an alias are omitted. With a whitelist, sources whose
        first segment is unknown are skipped without querying.
        """
        paths = list(dict.fromkeys(paths))
        if whitelist is not None:
            paths = filter_whitelisted(paths, whitelist)
        if not paths:
            return {}

        criteria = {
            "source": {"$in": paths},
            "language": {"$in": candidate_languages(language)},
        }
        rows = await self.store.find_sorted(
            criteria,
            sort_spec(language, first_pass),
            limit=0 if first_pass else 1,
        )

        result: Dict[str, str] = {}
        for row in rows:
            # Rows arrive best first; later rows for the same source lose.
            result.setdefault(row["source"], row["alias"])
        return result

    async def lookup_alias(
        self,
        source: str,
        language: str,
        whitelist: Optional[Mapping[str, int]] = None,
    ) -> Optional[str]:
        found = await self.lookup_aliases([source], language, first_pass=False, whitelist=whitelist)
        return found.get(source)

    async def lookup_source(self, alias: str, language: str) -> Optional[str]:
        """Reverse lookup: the system path behind a public alias."""
        criteria = {
            "alias": alias,
            "language": {"$in": candidate_languages(language)},
        }
        rows = await self.store.find_sorted(
            criteria,
            sort_spec(language, first_pass=False),
            projection={"source": 1, "_id": 0},
            limit=1,
        )
        return rows[0]["source"] if rows else None
