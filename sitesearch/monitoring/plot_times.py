"""
Command-line tool for charting one or two indexing timing files.
"""
import argparse
import logging
import sys

from sitesearch.common.config import LINE_TITLES
from sitesearch.common.errors import SiteSearchError
from sitesearch.common.utils import configure_logging
from sitesearch.indexer.timing import save_times
from sitesearch.monitoring.grapher import IndexTimeGrapher, generate_dummy_times

logger = logging.getLogger("grapher")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Chart per-document indexing times')
    parser.add_argument('times_files', nargs='*', help='One or two timing files (one integer per line)')
    parser.add_argument('--titles', nargs='+', default=list(LINE_TITLES), help='Line title for each timing file')
    parser.add_argument('--unit', choices=['ms', 'sec'], default='ms', help='Unit for the y axis')
    parser.add_argument('--output', help='Write the chart to this HTML file instead of opening it')
    parser.add_argument('--dummy', type=int, metavar='N',
                        help='Write N synthetic times to dummy.txt and chart them alongside the first file')
    args = parser.parse_args(argv)

    if args.dummy is not None:
        if args.dummy <= 0:
            parser.error('--dummy needs a positive count')
        if len(args.times_files) > 1:
            parser.error('--dummy can only be combined with a single timing file')
    elif not 1 <= len(args.times_files) <= 2:
        parser.error('expected one or two timing files')
    return args


def main(argv=None):
    """Main function to run the chart tool."""
    configure_logging("Grapher")
    args = parse_args(argv)

    paths = list(args.times_files)
    try:
        if args.dummy is not None:
            save_times('dummy.txt', generate_dummy_times(args.dummy))
            paths.append('dummy.txt')
        chart = IndexTimeGrapher.from_files(paths, line_titles=args.titles, unit=args.unit)
        if args.output:
            chart.save(args.output)
        else:
            chart.show()
    except (SiteSearchError, ValueError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
