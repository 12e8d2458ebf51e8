"""
Builds the search index from a directory of JSON-lines data files and records
how long each document took to index.
"""
import argparse
import dataclasses
import logging
import os
import sys

from sitesearch.common.config import DATA_DIR, INDEX_DIR, TIMES_FILE, SearchConfig
from sitesearch.common.errors import SiteSearchError
from sitesearch.common.utils import configure_logging, list_data_files
from sitesearch.indexer.indexer_node import WhooshIndexer
from sitesearch.indexer.timing import save_times
from sitesearch.monitoring.grapher import IndexTimeGrapher

logger = logging.getLogger("indexer")


def run_indexer(file_list, config):
    """
    Index the given files and return each document's completion time (ms).
    Returns None when there is nothing to index.
    """
    if not file_list:
        print("Data folder is empty. No files were indexed")
        return None

    print("Starting Index. Please wait.")
    with WhooshIndexer(config) as indexer:
        doc_times = indexer.index_files(file_list)
    print(f"Indexing complete. Index files are saved in the directory: "
          f"{os.path.abspath(config.index_dir)}")
    return doc_times


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Build the search index from JSON-lines data files')
    parser.add_argument('data_dir', nargs='?', default=DATA_DIR,
                        help=f'Directory holding the data files (default: {DATA_DIR})')
    parser.add_argument('--index-dir', default=INDEX_DIR, help='Directory for the index files')
    parser.add_argument('--times-file', default=TIMES_FILE, help='File to write per-document times to')
    parser.add_argument('--graph', metavar='FILE', help='Write the runtime chart to this HTML file')
    parser.add_argument('--show', action='store_true', help='Open the runtime chart in a browser')
    return parser.parse_args(argv)


def main(argv=None):
    """Main function to build the index."""
    configure_logging("Indexer")
    args = parse_args(argv)
    config = dataclasses.replace(SearchConfig(), index_dir=args.index_dir,
                                 times_file=args.times_file)

    if not os.path.isdir(args.data_dir):
        message = (f"Directory {args.data_dir} is invalid. Verify that the input is the "
                   f"directory holding the data files.")
        logger.error(message)
        print(f"Error: {message}", file=sys.stderr)
        return 1

    try:
        doc_times = run_indexer(list_data_files(args.data_dir), config)
        if doc_times is None:
            return 0
        save_times(config.times_file, doc_times)

        if args.graph or args.show:
            chart = IndexTimeGrapher.from_files([config.times_file])
            if args.graph:
                chart.save(args.graph)
            if args.show:
                chart.show()
    except SiteSearchError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
