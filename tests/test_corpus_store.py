import sqlite3

import pytest

from be_law.corpus.store import CorpusStore, ProvisionKey
from be_law.errors import CorpusUnavailableError
from be_law.schemas import LegalProvision
from conftest import YOUTH_FR


def test_counts_and_metadata(store):
    counts = store.counts()
    assert counts['legal_documents'] == 4
    assert counts['legal_provisions'] == 6
    assert counts['legal_provision_versions'] == 6
    assert counts['eu_references'] == 3
    assert store.metadata()['builder'] == 'test-db'


def test_count_rows_rejects_unknown_table(store):
    with pytest.raises(ValueError):
        store.count_rows('sqlite_master')


def test_read_only(store):
    with pytest.raises(sqlite3.OperationalError):
        store.conn.execute("DELETE FROM legal_documents")


def test_missing_database(tmp_path):
    store = CorpusStore(tmp_path / 'missing.db')
    with pytest.raises(CorpusUnavailableError):
        store.get_document(YOUTH_FR)


def test_provision_key_matches_either_column(store):
    assert store.find_provision(YOUTH_FR, ProvisionKey('art10')).section == '10'
    assert store.find_provision(YOUTH_FR, ProvisionKey('10')).provision_ref == 'art10'
    assert store.find_provision(YOUTH_FR, ProvisionKey()) is None
    assert not store.provision_exists(YOUTH_FR, ProvisionKey('art99'))


def test_provision_key_in_python():
    row = LegalProvision(document_id=YOUTH_FR, provision_ref='art1', section='1', content='...')
    assert ProvisionKey('1').matches(row)
    assert ProvisionKey('art1').matches(row)
    assert not ProvisionKey('2', 'art2').matches(row)
    assert not ProvisionKey(None, '')


def test_capabilities(store):
    caps = store.capabilities()
    assert 'core_legislation' in caps
    assert 'provision_history' in caps
    assert 'eu_references' in caps
    assert 'case_law' in caps
    assert 'preparatory_works' not in caps


def test_metadata_fills_defaults(store):
    meta = store.metadata()
    assert meta['tier'] == 'free'
    assert meta['schema_version'] == '1.0'
    assert meta['built_at'] == '2026-02-16T00:00:00.000Z'


def test_bare_database_defaults(tmp_path):
    path = tmp_path / 'bare.db'
    conn = sqlite3.connect(path)
    conn.executescript(
        "CREATE TABLE legal_documents (id TEXT PRIMARY KEY, type TEXT, title TEXT, status TEXT);"
        "CREATE TABLE legal_provisions (id INTEGER PRIMARY KEY, document_id TEXT, provision_ref TEXT,"
        " section TEXT, title TEXT, content TEXT);"
    )
    conn.close()

    bare = CorpusStore(path)
    try:
        assert bare.capabilities() == ['core_legislation']
        assert bare.metadata() == {'tier': 'free', 'schema_version': '1.0'}
    finally:
        bare.close()
