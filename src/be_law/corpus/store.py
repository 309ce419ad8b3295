"""Read-only SQLite access to the statute corpus.

The corpus is built out of process by the ingestion pipeline; this module
only reads it. Each thread gets its own ``mode=ro`` connection.
"""
from __future__ import annotations

import logging
import re
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from be_law.errors import CorpusUnavailableError
from be_law.schemas import LegalDocument, LegalProvision, LegalProvisionVersion

logger = logging.getLogger(__name__)

DOCUMENT_COLUMNS = "id, type, title, status, issued_date, in_force_date, url, language, numac"
PROVISION_COLUMNS = "id, document_id, provision_ref, chapter, section, title, content"
VERSION_COLUMNS = PROVISION_COLUMNS + ", valid_from, valid_to"

COUNTED_TABLES = (
    'legal_documents',
    'legal_provisions',
    'legal_provision_versions',
    'eu_documents',
    'eu_references',
)

# capability -> tables that must all be present
CAPABILITY_TABLES: Dict[str, Tuple[str, ...]] = {
    'core_legislation': ('legal_documents', 'legal_provisions'),
    'provision_history': ('legal_provision_versions',),
    'full_text_search': ('provisions_fts', 'provision_versions_fts'),
    'eu_references': ('eu_documents', 'eu_references'),
    'case_law': ('case_law',),
    'preparatory_works': ('preparatory_works',),
}

METADATA_DEFAULTS: Dict[str, str] = {'tier': 'free', 'schema_version': '1.0'}

# FTS5 index over each provision table (external content, rowid = id)
FTS_TABLES = {
    'legal_provisions': 'provisions_fts',
    'legal_provision_versions': 'provision_versions_fts',
}

SEARCH_TERM_RE = re.compile(r"\w+")


def search_terms(query: Optional[str]) -> List[str]:
    return SEARCH_TERM_RE.findall(query or '')


class ProvisionKey:
    """Provision identity: a reference matches a row through either
    ``provision_ref`` or ``section``.

    Several literal candidates may be given (e.g. '1' and 'art1'); a row
    matches when any candidate equals either column.
    """

    def __init__(self, *candidates: Optional[str]):
        self.candidates: Tuple[str, ...] = tuple(dict.fromkeys(c for c in candidates if c))

    def __bool__(self) -> bool:
        return bool(self.candidates)

    def clause(self, alias: str = '') -> Tuple[str, List[str]]:
        prefix = f"{alias}." if alias else ''
        marks = ', '.join('?' for _ in self.candidates)
        sql = f"({prefix}provision_ref IN ({marks}) OR {prefix}section IN ({marks}))"
        return sql, list(self.candidates) * 2

    def matches(self, row: LegalProvision) -> bool:
        return row.provision_ref in self.candidates or row.section in self.candidates

    def __repr__(self) -> str:
        return f"ProvisionKey{self.candidates!r}"


class CorpusStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------
    def _connect(self) -> sqlite3.Connection:
        if not self.path.exists():
            raise CorpusUnavailableError(f"Corpus database not found at {self.path}")
        uri = self.path.resolve().as_uri() + "?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        except sqlite3.Error as e:
            raise CorpusUnavailableError(f"Cannot open corpus database {self.path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @property
    def conn(self) -> sqlite3.Connection:
        conn = getattr(self._local, 'conn', None)
        if conn is None:
            conn = self._connect()
            self._local.conn = conn
        return conn

    def close(self) -> None:
        conn = getattr(self._local, 'conn', None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    def _one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self.conn.execute(sql, tuple(params)).fetchone()

    def _all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        return self.conn.execute(sql, tuple(params)).fetchall()

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def get_document(self, document_id: str) -> Optional[LegalDocument]:
        row = self._one(f"SELECT {DOCUMENT_COLUMNS} FROM legal_documents WHERE id = ? LIMIT 1", (document_id,))
        return LegalDocument(**dict(row)) if row else None

    def first_document_with_prefix(self, prefixes: Iterable[str]) -> Optional[LegalDocument]:
        """Lexicographically first document whose id starts with any prefix."""
        prefixes = list(prefixes)
        if not prefixes:
            return None
        where = ' OR '.join('substr(id, 1, ?) = ?' for _ in prefixes)
        params: List[Any] = []
        for p in prefixes:
            params.extend([len(p), p])
        row = self._one(
            f"SELECT {DOCUMENT_COLUMNS} FROM legal_documents WHERE {where} ORDER BY id LIMIT 1",
            params,
        )
        return LegalDocument(**dict(row)) if row else None

    def best_title_match(self, fragment: str) -> Optional[LegalDocument]:
        """Title containing ``fragment`` (case-sensitive); exact title first,
        then the shortest title."""
        row = self._one(
            f"""
            SELECT {DOCUMENT_COLUMNS}
            FROM legal_documents
            WHERE instr(title, ?) > 0
            ORDER BY CASE WHEN title = ? THEN 0 ELSE 1 END, length(title), id
            LIMIT 1
            """,
            (fragment, fragment),
        )
        return LegalDocument(**dict(row)) if row else None

    # ------------------------------------------------------------------
    # Provisions
    # ------------------------------------------------------------------
    def find_provision(self, document_id: str, key: ProvisionKey) -> Optional[LegalProvision]:
        if not key:
            return None
        clause, params = key.clause()
        row = self._one(
            f"SELECT {PROVISION_COLUMNS} FROM legal_provisions WHERE document_id = ? AND {clause} ORDER BY id LIMIT 1",
            [document_id, *params],
        )
        return LegalProvision(**dict(row)) if row else None

    def provision_exists(self, document_id: str, key: ProvisionKey) -> bool:
        if not key:
            return False
        clause, params = key.clause()
        row = self._one(
            f"SELECT 1 FROM legal_provisions WHERE document_id = ? AND {clause} LIMIT 1",
            [document_id, *params],
        )
        return row is not None

    def list_provisions(self, document_id: str) -> List[LegalProvision]:
        rows = self._all(
            f"SELECT {PROVISION_COLUMNS} FROM legal_provisions WHERE document_id = ? ORDER BY id",
            (document_id,),
        )
        return [LegalProvision(**dict(r)) for r in rows]

    def list_versions(self, document_id: str, key: Optional[ProvisionKey] = None) -> List[LegalProvisionVersion]:
        sql = f"SELECT {VERSION_COLUMNS} FROM legal_provision_versions WHERE document_id = ?"
        params: List[Any] = [document_id]
        if key:
            clause, key_params = key.clause()
            sql += f" AND {clause}"
            params.extend(key_params)
        rows = self._all(sql + " ORDER BY provision_ref, id", params)
        return [LegalProvisionVersion(**dict(r)) for r in rows]

    # ------------------------------------------------------------------
    # Keyword search
    # ------------------------------------------------------------------
    def search_provisions(
        self,
        terms: Sequence[str],
        document_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        historical: bool = False,
    ) -> List[Dict[str, Any]]:
        """Provision rows containing every term, joined with their document's
        title and status.

        Uses the FTS5 index (ranked by bm25) when the corpus ships one, a
        LIKE scan in row order otherwise. ``historical`` searches version rows.
        """
        if not terms:
            return []
        table = 'legal_provision_versions' if historical else 'legal_provisions'
        columns = VERSION_COLUMNS if historical else PROVISION_COLUMNS
        select = ', '.join(f"p.{c.strip()}" for c in columns.split(','))
        fts = FTS_TABLES[table]

        params: List[Any] = []
        if self.has_table(fts):
            source = f"{fts} JOIN {table} p ON p.id = {fts}.rowid"
            where = [f"{fts} MATCH ?"]
            params.append(' '.join(f'"{t}"' for t in terms))
            order = f"bm25({fts}), p.id"
        else:
            source = f"{table} p"
            where = []
            for term in terms:
                where.append("(p.content LIKE ? OR p.title LIKE ?)")
                params.extend([f"%{term}%", f"%{term}%"])
            order = "p.id"
        if document_id:
            where.append("p.document_id = ?")
            params.append(document_id)
        if status:
            where.append("d.status = ?")
            params.append(status)

        sql = f"""
            SELECT {select}, d.title AS document_title, d.status AS document_status
            FROM {source}
            JOIN legal_documents d ON d.id = p.document_id
            WHERE {' AND '.join(where)}
            ORDER BY {order}
        """
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        return [dict(r) for r in self._all(sql, params)]

    # ------------------------------------------------------------------
    # EU cross-references (optional tables)
    # ------------------------------------------------------------------
    def eu_references(self, document_id: str, eu_document_id: Optional[str] = None) -> List[Dict[str, Any]]:
        if not (self.has_table('eu_documents') and self.has_table('eu_references')):
            return []
        sql = """
            SELECT
              ed.id, ed.type, ed.title, ed.in_force, ed.amended_by,
              er.reference_type, er.is_primary_implementation, er.implementation_status
            FROM eu_documents ed
            JOIN eu_references er ON ed.id = er.eu_document_id
            WHERE er.document_id = ?
        """
        params: List[Any] = [document_id]
        if eu_document_id:
            sql += " AND ed.id = ?"
            params.append(eu_document_id)
        return [dict(r) for r in self._all(sql + " ORDER BY er.id", params)]

    # ------------------------------------------------------------------
    # Dataset facts
    # ------------------------------------------------------------------
    def has_table(self, name: str) -> bool:
        row = self._one("SELECT 1 FROM sqlite_master WHERE type IN ('table', 'view') AND name = ?", (name,))
        return row is not None

    def count_rows(self, table: str) -> int:
        if table not in COUNTED_TABLES:
            raise ValueError(f"Unknown table {table}")
        try:
            row = self._one(f"SELECT COUNT(*) AS count FROM {table}")
        except sqlite3.OperationalError:
            return 0
        return int(row['count']) if row else 0

    def counts(self) -> Dict[str, int]:
        return {t: self.count_rows(t) for t in COUNTED_TABLES}

    def metadata(self) -> Dict[str, str]:
        """``db_metadata`` key/values over METADATA_DEFAULTS."""
        try:
            rows = self._all("SELECT key, value FROM db_metadata")
        except sqlite3.OperationalError:
            return dict(METADATA_DEFAULTS)
        return {**METADATA_DEFAULTS, **{r['key']: r['value'] for r in rows}}

    def capabilities(self) -> List[str]:
        return [
            name for name, tables in CAPABILITY_TABLES.items()
            if all(self.has_table(t) for t in tables)
        ]
