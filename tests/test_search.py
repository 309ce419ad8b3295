import pytest

from be_law.corpus.store import CorpusStore, search_terms
from be_law.errors import AsOfDateError
from be_law.resolve.search import MAX_LIMIT, LegislationSearch
from conftest import MEDIATION_FR, PRIVACY_FR, YOUTH_FR, build_corpus


@pytest.fixture
def search(store):
    return LegislationSearch(store)


@pytest.fixture
def like_only_store(tmp_path):
    s = CorpusStore(build_corpus(str(tmp_path / 'no-fts.db'), fts=False))
    yield s
    s.close()


def test_search_terms():
    assert search_terms('  protection, de la jeunesse ') == ['protection', 'de', 'la', 'jeunesse']
    assert search_terms('') == []
    assert search_terms(None) == []


def test_keyword_hits_carry_document(search):
    hits = search.search('jeunesse')
    assert hits
    assert {h.document_id for h in hits} == {YOUTH_FR}
    assert {h.provision_ref for h in hits} == {'art1', 'art10'}
    assert hits[0].document_title.startswith('Loi du 2 fevrier 1994')
    assert hits[0].valid_from is None


def test_document_filter(search):
    hits = search.search('protection', document_id=YOUTH_FR)
    assert hits
    assert all(h.document_id == YOUTH_FR for h in hits)


def test_document_filter_accepts_loose_reference(search):
    hits = search.search('traitement', document_id='Loi du 8 decembre 1992')
    assert hits
    assert all(h.document_id == PRIVACY_FR for h in hits)


def test_unknown_document_gives_nothing(search):
    assert search.search('protection', document_id='loi-2099-01-01-2099000000-fr') == []


def test_status_filter(search):
    hits = search.search('mediation', status='repealed')
    assert [h.document_id for h in hits] == [MEDIATION_FR]
    assert hits[0].document_status == 'repealed'
    assert search.search('jeunesse', status='repealed') == []


def test_as_of_searches_historical_versions(search):
    hits = search.search('ancien texte', document_id=YOUTH_FR, as_of_date='2000-01-01')
    assert len(hits) == 1
    assert hits[0].provision_ref == 'art1'
    assert hits[0].valid_from == '1994-03-01'
    assert hits[0].valid_to == '2010-01-01'
    assert hits[0].content.startswith('Ancien texte')


def test_as_of_skips_versions_not_in_force(search):
    assert search.search('ancien texte', document_id=YOUTH_FR, as_of_date='2015-06-01') == []
    hits = search.search('modernise', document_id=YOUTH_FR, as_of_date='2015-06-01')
    assert [h.valid_from for h in hits] == ['2010-01-01']


def test_as_of_keeps_one_version_per_provision(search):
    hits = search.search('tekst', as_of_date='2003-01-01')
    assert len(hits) == 1
    # Two rows start on 2000-01-01; the later row wins the tie.
    assert hits[0].content == 'Gewijzigde tekst B.'


def test_empty_query(search):
    assert search.search('') == []
    assert search.search('   ') == []
    assert search.search(None) == []


def test_bad_as_of_date(search):
    with pytest.raises(AsOfDateError, match='as_of_date must be an ISO date'):
        search.search('jeunesse', as_of_date='2026/01/01')


def test_bad_as_of_date_checked_before_query(search):
    with pytest.raises(AsOfDateError):
        search.search('', as_of_date='2026/01/01')


def test_limit(search):
    assert len(search.search('la', limit=1)) == 1
    assert len(search.search('la', limit=MAX_LIMIT + 100)) <= MAX_LIMIT


def test_like_fallback_without_fts(like_only_store):
    assert 'full_text_search' not in like_only_store.capabilities()
    search = LegislationSearch(like_only_store)

    hits = search.search('jeunesse')
    assert [h.provision_ref for h in hits] == ['art1', 'art10']

    hits = search.search('ancien texte', document_id=YOUTH_FR, as_of_date='2000-01-01')
    assert [(h.provision_ref, h.valid_from) for h in hits] == [('art1', '1994-03-01')]
