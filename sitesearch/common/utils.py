"""
Utility functions for the site search system.
"""
import logging
import os


def configure_logging(component, log_file=None, level=logging.INFO):
    """Send log records to the console and to '<component>.log'."""
    if log_file is None:
        log_file = f"{component.lower()}.log"
    logging.basicConfig(
        level=level,
        format=f'%(asctime)s [%(levelname)s] [{component}] %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def list_data_files(directory):
    """Return the regular files directly inside a directory, sorted by name."""
    return sorted(
        os.path.join(directory, name)
        for name in os.listdir(directory)
        if os.path.isfile(os.path.join(directory, name))
    )


def longest_term_length(query):
    """Length of the longest whitespace-separated token in a query."""
    return max((len(token) for token in query.split()), default=0)
