"""
Indexer for the site search system.
Builds a Whoosh index over website records read from JSON-lines files.
"""
import logging
import os
import traceback

from whoosh.analysis import StandardAnalyzer
from whoosh.fields import Schema, TEXT, ID
from whoosh.index import create_in, LockError

from sitesearch.common.config import SearchConfig
from sitesearch.common.errors import IOFailure, IndexUnavailableError, MalformedRecordError
from sitesearch.indexer.records import iter_lines, parse_record
from sitesearch.indexer.timing import TimingRecorder

logger = logging.getLogger("indexer")


def build_analyzer(config):
    """Standard tokenizer, lowercased, with the configured stop words removed."""
    return StandardAnalyzer(stoplist=config.stop_words, minsize=1)


def build_schema(config):
    """Schema with tokenized text/title and an untokenized url, all stored."""
    analyzer = build_analyzer(config)
    return Schema(**{
        config.text_field: TEXT(stored=True, analyzer=analyzer),
        config.title_field: TEXT(stored=True, analyzer=analyzer),
        config.url_field: ID(stored=True),
    })


class WhooshIndexer:
    """
    Writes website records into a fresh on-disk index.

    The index directory is created if needed and any existing index in it is
    replaced. A single writer is held open until close() commits it.
    """
    def __init__(self, config=None, clock=None):
        self.config = config or SearchConfig()
        self.index_dir = self.config.index_dir
        self.recorder = TimingRecorder(clock) if clock else TimingRecorder()
        self.schema = build_schema(self.config)

        try:
            os.makedirs(self.index_dir, exist_ok=True)
            logger.info(f"Creating new index in {self.index_dir}")
            self.ix = create_in(self.index_dir, self.schema)
            self.writer = self.ix.writer()
        except LockError as e:
            raise IndexUnavailableError(f"Index {self.index_dir} is locked by another writer") from e
        except OSError as e:
            raise IOFailure(f"Error creating the index writer in {self.index_dir}: {e}") from e
        logger.debug("Index writer opened")

    @property
    def doc_times(self):
        """Cumulative completion time (ms) of every document indexed so far."""
        return list(self.recorder.times)

    def _check_open(self):
        if self.writer is None:
            raise IndexUnavailableError(f"Index writer for {self.index_dir} is closed")

    def add_record(self, record):
        """Add a single website document to the index."""
        self._check_open()
        fields = {
            self.config.text_field: record.text,
            self.config.title_field: record.title,
            self.config.url_field: record.url,
        }
        try:
            self.writer.add_document(**fields)
        except Exception as e:
            raise IOFailure(f"Error adding document {record.url} to the index: {e}") from e
        logger.debug(f"Indexed document: {record.url}")

    def index_files(self, paths):
        """
        Index every record in the given JSON-lines files.

        Malformed lines and documents the index rejects are logged and skipped.
        Returns the completion times of the documents that were indexed.
        """
        self._check_open()
        self.recorder.start()
        skipped = 0

        for path, line_number, line in iter_lines(paths):
            try:
                record = parse_record(line, path, line_number)
                self.add_record(record)
            except MalformedRecordError as e:
                skipped += 1
                logger.warning(f"Skipping record: {e}")
                continue
            except IOFailure as e:
                skipped += 1
                logger.error(f"{path}:{line_number}: {e}")
                logger.error(traceback.format_exc())
                continue
            self.recorder.record()

        logger.info(f"Indexed {len(self.recorder)} documents ({skipped} skipped)")
        return self.doc_times

    def close(self):
        """Commit the pending documents and release the writer lock."""
        if self.writer is None:
            return
        writer, self.writer = self.writer, None
        try:
            writer.commit()
        except Exception as e:
            writer.cancel()
            raise IOFailure(f"Error closing the index writer: {e}") from e
        logger.info(f"Index committed to {self.index_dir}")

    def cancel(self):
        """Discard the pending documents and release the writer lock."""
        if self.writer is None:
            return
        writer, self.writer = self.writer, None
        writer.cancel()
        logger.warning(f"Indexing into {self.index_dir} cancelled, nothing committed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.cancel()
        else:
            self.close()
        return False
