import os
import sys
import sqlite3

import pytest

# Ensure the `src/` directory is on sys.path so we can import `be_law` package
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from be_law.corpus.store import CorpusStore  # noqa: E402

SCHEMA = """
CREATE TABLE legal_documents (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL,
  title TEXT NOT NULL,
  status TEXT NOT NULL,
  issued_date TEXT,
  in_force_date TEXT,
  url TEXT,
  description TEXT,
  language TEXT,
  numac TEXT
);

CREATE TABLE legal_provisions (
  id INTEGER PRIMARY KEY,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  provision_ref TEXT NOT NULL,
  chapter TEXT,
  section TEXT NOT NULL,
  title TEXT,
  content TEXT NOT NULL,
  language TEXT,
  UNIQUE(document_id, provision_ref)
);

CREATE TABLE legal_provision_versions (
  id INTEGER PRIMARY KEY,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  provision_ref TEXT NOT NULL,
  chapter TEXT,
  section TEXT NOT NULL,
  title TEXT,
  content TEXT NOT NULL,
  valid_from TEXT,
  valid_to TEXT
);

CREATE TABLE eu_documents (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL,
  title TEXT,
  in_force BOOLEAN DEFAULT 1,
  amended_by TEXT
);

CREATE TABLE eu_references (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  eu_document_id TEXT NOT NULL REFERENCES eu_documents(id),
  reference_type TEXT NOT NULL,
  is_primary_implementation BOOLEAN DEFAULT 0,
  implementation_status TEXT
);

CREATE TABLE db_metadata (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);

CREATE TABLE case_law (
  id INTEGER PRIMARY KEY,
  document_id TEXT NOT NULL,
  court TEXT,
  decision_date TEXT,
  summary TEXT
);
"""

FTS_SCHEMA = """
CREATE VIRTUAL TABLE provisions_fts USING fts5(
  content, title,
  content='legal_provisions',
  content_rowid='id',
  tokenize='unicode61'
);
CREATE VIRTUAL TABLE provision_versions_fts USING fts5(
  content, title,
  content='legal_provision_versions',
  content_rowid='id',
  tokenize='unicode61'
);
INSERT INTO provisions_fts(provisions_fts) VALUES ('rebuild');
INSERT INTO provision_versions_fts(provision_versions_fts) VALUES ('rebuild');
"""

YOUTH_FR = 'loi-1994-02-02-1994009284-fr'
YOUTH_NL = 'wet-1994-02-02-1994009284-nl'
MEDIATION_FR = 'loi-1994-02-10-1994009323-fr'
PRIVACY_FR = 'loi-1992-12-08-1992009783-fr'

DOCUMENTS = [
    (YOUTH_FR, 'statute', 'Loi du 2 fevrier 1994 relative a la protection de la jeunesse', 'in_force',
     '1994-02-02', '1994-03-01', 'http://www.ejustice.just.fgov.be/eli/loi/1994/02/02/1994009284/justel', 'fr', '1994009284'),
    (YOUTH_NL, 'statute', 'Wet van 2 februari 1994 betreffende de jeugdbescherming', 'in_force',
     '1994-02-02', '1994-03-01', 'http://www.ejustice.just.fgov.be/eli/wet/1994/02/02/1994009284/justel', 'nl', '1994009284'),
    (MEDIATION_FR, 'statute', 'Loi du 10 fevrier 1994 sur la mediation penale', 'repealed',
     '1994-02-10', '1994-04-01', 'http://www.ejustice.just.fgov.be/eli/loi/1994/02/10/1994009323/justel', 'fr', '1994009323'),
    (PRIVACY_FR, 'statute', 'Loi du 8 decembre 1992 relative a la vie privee', 'amended',
     '1992-12-08', '1993-01-01', None, 'fr', '1992009783'),
]

# (document_id, provision_ref, section, title, content)
PROVISIONS = [
    (YOUTH_FR, 'art1', '1', 'Article 1', 'La presente loi protege la jeunesse et organise les mesures de protection.'),
    (YOUTH_FR, 'art10', '10', 'Article 10', 'Le tribunal de la jeunesse peut prendre des mesures de protection adaptees.'),
    (YOUTH_NL, 'art1', '1', 'Artikel 1', 'Deze wet beschermt de jeugd en stelt beschermingsmaatregelen vast.'),
    (MEDIATION_FR, 'art1', '1', 'Article 1', 'La mediation penale est organisee devant le tribunal competent.'),
    (PRIVACY_FR, 'art1', '1', 'Article 1', 'La presente loi encadre le traitement des donnees personnelles.'),
    (PRIVACY_FR, 'art5bis', '5 bis', 'Article 5bis', 'Le responsable du traitement informe la personne concernee.'),
]

# (document_id, provision_ref, section, content, valid_from, valid_to)
VERSIONS = [
    (YOUTH_FR, 'art1', '1', 'Ancien texte: la loi protege la jeunesse selon la version initiale.', '1994-03-01', '2010-01-01'),
    (YOUTH_FR, 'art1', '1', 'Texte modernise: la loi protege la jeunesse et renforce la protection des mineurs.', '2010-01-01', None),
    (YOUTH_FR, 'art10', '10', 'Historique: le tribunal de la jeunesse peut statuer sur les mesures.', '1994-03-01', None),
    # Overlapping rows: an open start, and two rows sharing a start date.
    (YOUTH_NL, 'art1', '1', 'Oorspronkelijke tekst.', None, '2005-01-01'),
    (YOUTH_NL, 'art1', '1', 'Gewijzigde tekst A.', '2000-01-01', None),
    (YOUTH_NL, 'art1', '1', 'Gewijzigde tekst B.', '2000-01-01', None),
]

EU_DOCUMENTS = [
    ('regulation:2016/679', 'regulation', 'General Data Protection Regulation', 1, None),
    ('directive:95/46', 'directive', 'Data Protection Directive', 0, '["regulation:2016/679"]'),
    ('directive:2002/58', 'directive', 'ePrivacy Directive', 0, 'regulation:2016/679'),
]

# (document_id, eu_document_id, reference_type, is_primary_implementation, implementation_status)
EU_REFERENCES = [
    (YOUTH_FR, 'regulation:2016/679', 'supplements', 1, 'complete'),
    (MEDIATION_FR, 'directive:95/46', 'implements', 1, 'unknown'),
    (PRIVACY_FR, 'directive:2002/58', 'implements', 1, 'complete'),
]


def build_corpus(path: str, fts: bool = True) -> str:
    conn = sqlite3.connect(path)
    with conn:
        conn.executescript(SCHEMA)
        conn.executemany(
            "INSERT INTO legal_documents (id, type, title, status, issued_date, in_force_date, url, language, numac)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            DOCUMENTS,
        )
        conn.executemany(
            "INSERT INTO legal_provisions (document_id, provision_ref, section, title, content) VALUES (?, ?, ?, ?, ?)",
            PROVISIONS,
        )
        conn.executemany(
            "INSERT INTO legal_provision_versions (document_id, provision_ref, section, content, valid_from, valid_to)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            VERSIONS,
        )
        conn.executemany(
            "INSERT INTO eu_documents (id, type, title, in_force, amended_by) VALUES (?, ?, ?, ?, ?)",
            EU_DOCUMENTS,
        )
        conn.executemany(
            "INSERT INTO eu_references (document_id, eu_document_id, reference_type, is_primary_implementation,"
            " implementation_status) VALUES (?, ?, ?, ?, ?)",
            EU_REFERENCES,
        )
        conn.executemany(
            "INSERT INTO db_metadata (key, value) VALUES (?, ?)",
            [('schema_version', '1.0'), ('built_at', '2026-02-16T00:00:00.000Z'), ('builder', 'test-db')],
        )
        if fts:
            try:
                conn.executescript(FTS_SCHEMA)
            except sqlite3.OperationalError:
                # sqlite built without FTS5; search falls back to LIKE
                pass
    conn.close()
    return path


@pytest.fixture(scope="session")
def corpus_path(tmp_path_factory):
    return build_corpus(str(tmp_path_factory.mktemp("corpus") / "database.db"))


@pytest.fixture
def store(corpus_path):
    s = CorpusStore(corpus_path)
    yield s
    s.close()


@pytest.fixture
def client(corpus_path, monkeypatch):
    from be_law.api import config, dependencies
    from be_law.api.server import app
    monkeypatch.setattr(config, "API_KEY", "")
    dependencies.load_store(corpus_path)
    with app.test_client() as c:
        yield c
