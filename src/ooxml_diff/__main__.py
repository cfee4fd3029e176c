"""
Command-line interface to the ooxml-diff module.
"""

import argparse
import hashlib
import pathlib as pl
import sys

from loguru import logger

from ooxml_diff import ArchiveDiffer, ArchiveStore, BinaryComparison, DiffPrinter, LoadError, \
    NotFoundError, load_relationship_map, setup_logging
from ooxml_diff.canonicalize import format_for_display


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "ooxml-diff", description='''Browse and diff the parts of OOXML/ODF packages.''')
    parser.add_argument('file1',
                        type=pl.Path,
                        metavar='FILE_1',
                        help='Archive to list, or first archive of the diff.')
    parser.add_argument('file2',
                        type=pl.Path,
                        metavar='FILE_2',
                        nargs='?',
                        help='Second archive. If given, both archives are diffed.')
    parser.add_argument('--binary-compare',
                        choices=[mode.value for mode in BinaryComparison],
                        default=BinaryComparison.FULL.value,
                        help='Equality check for binary parts: full content or size only.')
    parser.add_argument('--hash-algorithm',
                        required=False,
                        choices=sorted(name for name in hashlib.algorithms_guaranteed
                                       if not name.startswith('shake')),
                        default='md5',
                        help='Hash algorithm used to print digests of binary parts.')
    parser.add_argument('--suppress-common',
                        action='store_true',
                        help='Only prints the file paths that differ.')
    parser.add_argument('--quiet', '-q',
                        action='store_true',
                        help='Only print something if the archives differ.')
    parser.add_argument('--tree',
                        action='store_true',
                        help='Print the output as a tree instead of a flat list of files.')
    parser.add_argument('--show',
                        metavar='PATH',
                        help='Print the formatted content of the part at PATH instead of the tree.')
    parser.add_argument('--relationships',
                        metavar='PATH',
                        help='Print the resolved relationships of the part at PATH.')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Print debug log messages.')
    return parser


def show_single(args, printer: DiffPrinter):
    store = ArchiveStore.from_path(args.file1)
    if args.show:
        content = store.read_entry(args.show)
        if isinstance(content, str):
            content = format_for_display(content)
        printer.print_part(args.show, content)
    elif args.relationships:
        printer.print_relationships(args.relationships,
                                    load_relationship_map(store, args.relationships))
    else:
        printer.print_tree(store.list_tree())


def show_diff(args, printer: DiffPrinter):
    differ = ArchiveDiffer.from_paths(args.file1, args.file2,
                                      binary_comparison=BinaryComparison(args.binary_compare))
    if args.show:
        printer.print_part_pair(differ.load_part_pair(args.show))
    elif args.relationships:
        pair = differ.load_part_pair(args.relationships)
        printer.print_relationships(f'{args.relationships} (left)', pair.left_relationships)
        printer.print_relationships(f'{args.relationships} (right)', pair.right_relationships)
    else:
        printer.print_diff(differ.compute_diff())


def main(argv=None):
    """
    Main method that handles the command line interface of ooxml-diff
    """
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    printer = DiffPrinter(suppress_common_lines=args.suppress_common, quiet=args.quiet,
                          tree=args.tree, hash_algorithm=args.hash_algorithm)
    try:
        if args.file2 is None:
            show_single(args, printer)
        else:
            show_diff(args, printer)
    except FileNotFoundError as error:
        print(f'File not found: {error.filename}')
        return 1
    except (LoadError, NotFoundError) as error:
        logger.error(str(error))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
