"""
Resolve Belgian statute citations against a local corpus database.

  python scripts/resolve_citation.py validate "Loi du 2 fevrier 1994, art. 1"
  python scripts/resolve_citation.py format "art. 1er, Wet van 2 februari 1994" --style short
  python scripts/resolve_citation.py provision loi-1994-02-02-1994009284-fr --ref art1 --as-of 2000-01-01

Prints JSON on stdout. Uses BELGIAN_LAW_DB_PATH unless --db is given.
"""
import os
import sys
import json
import argparse
import logging

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from be_law.api import config
from be_law.corpus.store import CorpusStore
from be_law.errors import BeLawError, CorpusUnavailableError
from be_law.parsing.citation_formatter import STYLES, format_citation_text
from be_law.resolve.provision_resolver import ProvisionTemporalResolver
from be_law.validation.citation_validator import CitationValidator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("resolve_citation")


def _dump(result):
    if result is None:
        print("null")
        return
    if isinstance(result, list):
        print(json.dumps([r.model_dump(exclude_none=True) for r in result], indent=2, ensure_ascii=False))
        return
    print(json.dumps(result.model_dump(exclude_none=True), indent=2, ensure_ascii=False))


def main():
    parser = argparse.ArgumentParser(description="Validate, format or look up Belgian statute citations")
    parser.add_argument("--db", type=str, default=config.DB_PATH, help="Corpus SQLite database")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log resolution steps")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Check a citation against the corpus")
    p_validate.add_argument("citation")

    p_format = sub.add_parser("format", help="Render a citation in canonical form")
    p_format.add_argument("citation")
    p_format.add_argument("--style", choices=STYLES, default=config.DEFAULT_CITATION_FORMAT)

    p_provision = sub.add_parser("provision", help="Provision text, optionally as of a date")
    p_provision.add_argument("document_id")
    p_provision.add_argument("--ref", type=str, help="provision_ref or section, e.g. art1 or 1")
    p_provision.add_argument("--as-of", dest="as_of", type=str, help="ISO date YYYY-MM-DD")

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger("be_law").setLevel(logging.DEBUG)

    if args.command == "format":
        _dump(format_citation_text(args.citation, args.style))
        return

    store = CorpusStore(args.db)
    try:
        if args.command == "validate":
            _dump(CitationValidator(store).check(args.citation))
        else:
            _dump(ProvisionTemporalResolver(store).get_provision(args.document_id, args.ref, args.as_of))
    except (BeLawError, CorpusUnavailableError) as e:
        logger.error(str(e))
        sys.exit(2)
    finally:
        store.close()


if __name__ == "__main__":
    main()
