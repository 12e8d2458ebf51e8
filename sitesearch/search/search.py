"""
Search interface for the site search system.
Provides both command-line and web-based interfaces for searching the index.
"""
import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime

from flask import Flask, request, jsonify

from sitesearch.common.config import INDEX_DIR, WEB_PORT, DEFAULT_NUM_HITS, SearchConfig
from sitesearch.common.errors import SiteSearchError, QuerySyntaxError, IndexUnavailableError
from sitesearch.common.utils import configure_logging
from sitesearch.search.searcher import QuerySearcher

logger = logging.getLogger("search")

NO_RESULTS_NOTICE = "No results requested; nothing to search."


def parse_num_hits(value):
    """Return value as an int when it is a non-negative integer, else None."""
    try:
        num_hits = int(value)
    except (TypeError, ValueError):
        return None
    return num_hits if num_hits >= 0 else None


def prompt_num_hits(input_func=input):
    """Ask for the number of hits until an integer is entered."""
    while True:
        value = input_func("Number of results: ")
        try:
            return int(value.strip())
        except ValueError:
            print(f"'{value}' is not a whole number. Please try again.")


def read_request(terms, input_func=input):
    """
    Work out (num_hits, query) from the positional arguments, prompting for
    whatever is missing. The query is None when no hits were requested.
    """
    num_hits = parse_num_hits(terms[0]) if terms else None
    if num_hits is None:
        num_hits = prompt_num_hits(input_func)
        query = None
    else:
        query = ' '.join(terms[1:]) or None

    if num_hits <= 0:
        return num_hits, None
    if query is None:
        query = input_func("Query: ")
    return num_hits, query


def format_results(hits):
    """JSON array of result records."""
    return json.dumps([hit.to_dict() for hit in hits], indent=2)


def run_search(config, query, num_hits):
    with QuerySearcher(config) as searcher:
        return searcher.search(query, num_hits)


def cli_search(argv=None, input_func=input):
    """Run the command-line search interface."""
    parser = argparse.ArgumentParser(description='Search the site index')
    parser.add_argument('terms', nargs='*', help='[numHits] [query words...]')
    parser.add_argument('--index-dir', default=INDEX_DIR, help='Directory holding the index files')
    parser.add_argument('--web', action='store_true', help='Launch web interface instead of CLI')
    parser.add_argument('--port', type=int, default=WEB_PORT, help='Port for web interface')
    args = parser.parse_args(argv)

    config = dataclasses.replace(SearchConfig(), index_dir=args.index_dir)

    if args.web:
        start_web_interface(config, port=args.port)
        return 0

    num_hits, query = read_request(args.terms, input_func)
    if num_hits <= 0:
        print(NO_RESULTS_NOTICE)
        return 0

    try:
        hits = run_search(config, query, num_hits)
    except SiteSearchError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_results(hits))
    return 0


# Web interface
app = Flask(__name__)
app.config['SEARCH_CONFIG'] = SearchConfig()


@app.route('/api/search', methods=['POST'])
def search_api():
    """API endpoint for search."""
    data = request.get_json(silent=True) or {}
    query = data.get('query', '')
    max_results = data.get('max_results', DEFAULT_NUM_HITS)

    if not query:
        return jsonify({'error': 'No query provided'}), 400
    if not isinstance(max_results, int):
        return jsonify({'error': 'max_results must be an integer'}), 400

    try:
        hits = run_search(app.config['SEARCH_CONFIG'], query, max_results)
    except QuerySyntaxError as e:
        return jsonify({'error': str(e)}), 400
    except IndexUnavailableError as e:
        logger.error(str(e))
        return jsonify({'error': 'Failed to load index'}), 500

    results = [hit.to_dict() for hit in hits]
    response = {
        'query': query,
        'results': results,
        'result_count': len(results),
        'timestamp': datetime.now().isoformat()
    }
    return jsonify(response)


def start_web_interface(config, port=WEB_PORT):
    """Start the web interface."""
    app.config['SEARCH_CONFIG'] = config
    print(f"Starting web interface on http://localhost:{port}")
    app.run(host='0.0.0.0', port=port)


def main():
    """Main function to run the search interface."""
    configure_logging("Search")
    sys.exit(cli_search())


if __name__ == "__main__":
    main()
