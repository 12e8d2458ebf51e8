"""
Configuration settings for the site search system.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

# Record / document field names
TEXT_FIELD = 'text'
TITLE_FIELD = 'title'
URL_FIELD = 'url'
JSON_KEYS = (TEXT_FIELD, TITLE_FIELD, URL_FIELD)

# Common English words left out of the index and of parsed queries
STOP_WORDS = frozenset([
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if", "in",
    "into", "is", "it", "no", "not", "of", "on", "or", "such", "that", "the",
    "their", "then", "there", "these", "they", "this", "to", "was", "will", "with",
])

# Highlighter settings
MIN_FRAGMENT_LENGTH = 30  # characters
FRAGMENT_MULTIPLIER = 5
MAX_NUM_FRAGMENTS = 5
FRAGMENT_SEPARATOR = "..."
HIGHLIGHT_TAG = 'b'

# Default locations
DATA_DIR = 'Data_Files'
INDEX_DIR = 'Index_Files'
TIMES_FILE = 'index_times.txt'

# Chart settings
GRAPH_TITLE = "Document Completion Times"
LINE_TITLES = ("Whoosh Indexer", "Second Indexer")
X_AXIS_TITLE = "Document Number"
CHART_WIDTH = 560
CHART_HEIGHT = 500

# Search interface settings
DEFAULT_NUM_HITS = 10
WEB_PORT = 5000


@dataclass(frozen=True)
class SearchConfig:
    """Settings shared by the indexer, the query searcher and the web interface."""
    index_dir: str = INDEX_DIR
    times_file: str = TIMES_FILE
    text_field: str = TEXT_FIELD
    title_field: str = TITLE_FIELD
    url_field: str = URL_FIELD
    stop_words: FrozenSet[str] = field(default=STOP_WORDS)
    min_fragment_length: int = MIN_FRAGMENT_LENGTH
    fragment_multiplier: int = FRAGMENT_MULTIPLIER
    max_num_fragments: int = MAX_NUM_FRAGMENTS
    fragment_separator: str = FRAGMENT_SEPARATOR
    highlight_tag: str = HIGHLIGHT_TAG

    @property
    def record_keys(self) -> Tuple[str, str, str]:
        return (self.text_field, self.title_field, self.url_field)

    @property
    def search_fields(self) -> Tuple[str, str]:
        """Fields a free-text query is parsed against."""
        return (self.text_field, self.title_field)
