"""
Command-line entry point: build the lookup tables of one infile.

Usage
-----
    python -m slaph_lookup.run infile.ini
    python -m slaph_lookup.run infile.ini --verbose --dump tables.json
    python -m slaph_lookup.run infile.ini --index-arrays indices.npz

Configuration errors are reported on stdout and random-vector shortages on
stderr; both end the run with exit status 1.
"""

import argparse
import sys
from typing import List, Optional

from .errors import ConfigurationError, InsufficientRandomVectorsError
from .infile.reader import read_infile
from .lookup.builder import init_lookup_tables
from .lookup.export import dump_lookup_tables, save_index_arrays


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line entry point for lookup-table construction."""
    parser = argparse.ArgumentParser(
        description="Build sLapH lookup tables for the correlators of an infile"
    )
    parser.add_argument(
        "infile", type=str,
        help="Path to the infile"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print quark summaries, enumeration counters and table sizes"
    )
    parser.add_argument(
        "--dump", type=str, default=None,
        help="Write all tables as JSON to this path"
    )
    parser.add_argument(
        "--index-arrays", type=str, default=None,
        help="Write the correlator index arrays as npz to this path"
    )

    args = parser.parse_args(argv)

    try:
        data = read_infile(args.infile, verbose=args.verbose)
        tables = init_lookup_tables(data)
    except (ConfigurationError, FileNotFoundError) as e:
        print(e)
        sys.exit(1)
    except InsufficientRandomVectorsError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    if not args.verbose:
        print(tables.summary())

    if args.dump:
        path = dump_lookup_tables(tables, args.dump)
        print(f"Tables written to {path}")
    if args.index_arrays:
        path = save_index_arrays(tables, args.index_arrays)
        print(f"Index arrays written to {path}")


if __name__ == "__main__":
    main()
