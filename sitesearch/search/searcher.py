"""
Query searcher for the site search system.
Opens a persisted Whoosh index read-only and returns ranked, highlighted results.
"""
import logging
import os
from dataclasses import dataclass
from typing import Dict, List

from whoosh.highlight import HtmlFormatter, ContextFragmenter
from whoosh.index import open_dir, exists_in, LockError
from whoosh.qparser import MultifieldParser
from whoosh.qparser.common import QueryParserError
from whoosh.scoring import BM25F

from sitesearch.common.config import SearchConfig
from sitesearch.common.errors import IndexUnavailableError, QuerySyntaxError
from sitesearch.common.utils import longest_term_length

logger = logging.getLogger("search")


def fragment_length(query, config=None):
    """
    Highlight fragment size for a query.

    Longer query terms get proportionally more surrounding context; short
    queries never go below the configured minimum.
    """
    config = config or SearchConfig()
    scaled = round(longest_term_length(query) * config.fragment_multiplier)
    return max(config.min_fragment_length, scaled)


def find_query_error(query):
    """Return the first parser error recorded anywhere in a parsed query tree."""
    if getattr(query, 'error', None):
        return query.error
    for child in query.children():
        error = find_query_error(child)
        if error:
            return error
    return None


@dataclass
class SearchHit:
    """A single ranked result; the text field holds a highlighted excerpt."""
    fields: Dict[str, str]
    score: float

    def to_dict(self):
        result = dict(self.fields)
        result['score'] = self.score
        return result


class QuerySearcher:
    """Searches the index built by WhooshIndexer."""

    def __init__(self, config=None):
        self.config = config or SearchConfig()
        self.index_dir = self.config.index_dir

        self.ix = None
        try:
            if not os.path.isdir(self.index_dir) or not exists_in(self.index_dir):
                raise IndexUnavailableError(f"No index found in {self.index_dir}")
            self.ix = open_dir(self.index_dir, readonly=True)
            self.searcher = self.ix.searcher(weighting=BM25F())
        except IndexUnavailableError:
            raise
        except LockError as e:
            self._close_index()
            raise IndexUnavailableError(f"Index {self.index_dir} is locked") from e
        except Exception as e:
            self._close_index()
            raise IndexUnavailableError(f"Could not open index {self.index_dir}: {e}") from e

        self.parser = MultifieldParser(list(self.config.search_fields), schema=self.ix.schema)
        logger.info(f"Opened index {self.index_dir} ({self.searcher.doc_count()} documents)")

    @property
    def closed(self):
        return self.searcher is None

    def _check_open(self):
        if self.closed:
            raise IndexUnavailableError(f"Searcher for {self.index_dir} is closed")

    def parse(self, query_string):
        """Parse a free-text query against the text and title fields."""
        self._check_open()
        try:
            query = self.parser.parse(query_string)
        except QueryParserError as e:
            raise QuerySyntaxError(query_string, str(e)) from e

        error = find_query_error(query)
        if error:
            raise QuerySyntaxError(query_string, error)
        logger.debug(f"Parsed query: {query}")
        return query

    def perform_search(self, query_string, num_hits):
        """Run a query and return the engine's raw, ranked results."""
        query = self.parse(query_string)
        return self.searcher.search(query, limit=num_hits, terms=True)

    def get_document(self, docnum):
        """Stored fields of a document by its internal number."""
        self._check_open()
        return self.searcher.stored_fields(docnum)

    def search(self, query_string, max_hits) -> List[SearchHit]:
        """Top hits for a query, best first, with the text field reduced to fragments."""
        self._check_open()
        if max_hits <= 0:
            logger.info(f"No hits requested for '{query_string}'")
            return []

        logger.info(f"Searching index for: '{query_string}' (max results: {max_hits})")
        results = self.perform_search(query_string, max_hits)

        # Configure highlighting
        length = fragment_length(query_string, self.config)
        results.fragmenter = ContextFragmenter(maxchars=length, surround=length // 2)
        results.formatter = HtmlFormatter(tagname=self.config.highlight_tag,
                                          between=self.config.fragment_separator)
        logger.debug(f"Fragment length: {length}")

        text_field = self.config.text_field
        hits = []
        for hit in results:
            stored = self.get_document(hit.docnum)
            fields = {key: stored.get(key, '') for key in self.config.record_keys}
            fields[text_field] = hit.highlights(
                text_field,
                text=fields[text_field],
                top=self.config.max_num_fragments,
            )
            hits.append(SearchHit(fields=fields, score=float(hit.score)))
            logger.debug(f"Result: {fields[self.config.url_field]} (score: {hit.score})")

        logger.info(f"Found {len(hits)} results for '{query_string}'")
        return hits

    def _close_index(self):
        if self.ix is not None:
            self.ix.close()
            self.ix = None

    def close(self):
        if self.closed:
            return
        self.searcher.close()
        self.searcher = None
        self._close_index()
        logger.info(f"Closed index {self.index_dir}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
