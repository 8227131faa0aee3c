#!/usr/bin/env python3
import argparse
import logging
import sys
import os
from typing import Optional, List, TextIO

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from edit_matrix import (
    CostModel, __version__, build_matrix, build_matrix_t, distance, edit_script
)
from edit_matrix.utils import TokenType
from formatters import FormatterConfig, FormatterFactory
from inputs import InputSequence, from_string, read_input

logger = logging.getLogger('edit_matrix.cli')


def _number(text: str):
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")


def _non_negative(text: str):
    value = _number(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"costs must be non-negative: {text!r}")
    return value


def configure_logging(verbosity: int):
    if verbosity == 1:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')
    elif verbosity >= 2:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


class CLIApplication:
    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None):
        self.parser = self._create_parser()
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='edit-matrix',
            description='Compute the weighted edit distance between two sequences and show the edits',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
Examples:
  %(prog)s old.txt new.txt
  %(prog)s -t word old.txt new.txt
  %(prog)s --strings kitten sitting -f matrix
  %(prog)s --strings ab b --deletion-cost 5 --distance-only
            '''
        )
        parser.add_argument('source', help='Source file (or string with --strings)')
        parser.add_argument('target', help='Target file (or string with --strings)')
        parser.add_argument(
            '--strings',
            action='store_true',
            help='Treat SOURCE and TARGET as literal strings'
        )
        parser.add_argument(
            '-t', '--tokens',
            choices=[t.value for t in TokenType],
            default=None,
            help='Sequence elements: line, word, char or byte (default: line for files, char for strings)'
        )
        parser.add_argument('--deletion-cost', type=_non_negative, default=1, metavar='N',
                            help='Cost of deleting one element (default: 1)')
        parser.add_argument('--insertion-cost', type=_non_negative, default=1, metavar='N',
                            help='Cost of inserting one element (default: 1)')
        parser.add_argument('--substitution-cost', type=_non_negative, default=1, metavar='N',
                            help='Cost of replacing one element by a different one (default: 1)')
        parser.add_argument(
            '-f', '--format',
            choices=FormatterFactory.available(),
            default='simple',
            help='Output format (default: simple)'
        )
        parser.add_argument(
            '-w', '--width',
            type=int,
            default=130,
            metavar='NUM',
            help='Output width for side-by-side (default: 130)'
        )
        parser.add_argument(
            '-d', '--distance-only',
            action='store_true',
            help='Print only the edit distance'
        )
        parser.add_argument(
            '--transposed',
            action='store_true',
            help='Build the matrix with source and target exchanged'
        )
        parser.add_argument(
            '--ignore-case',
            action='store_true',
            help='Ignore case differences'
        )
        parser.add_argument(
            '--no-color',
            action='store_true',
            help='Disable colored output'
        )
        parser.add_argument(
            '-o', '--output',
            type=str,
            metavar='FILE',
            help='Write output to file'
        )
        parser.add_argument(
            '-v', '--verbose',
            action='count',
            default=0,
            help='Give once for progress messages, twice for debugging'
        )
        parser.add_argument(
            '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        configure_logging(args.verbose)
        output_file = None
        try:
            if args.output:
                output_file = open(args.output, 'w', encoding='utf-8')
            use_color = not args.no_color and output_file is None and self.stdout.isatty()
            return self._execute(args, output_file or self.stdout, use_color)
        except KeyboardInterrupt:
            self._error("Interrupted")
            return 130
        except Exception as e:
            logger.debug("Comparison failed", exc_info=True)
            self._error(str(e))
            return 2
        finally:
            if output_file is not None:
                output_file.close()

    def _error(self, text: str):
        self.stderr.write(f"Error: {text}\n")

    def _load(self, args, value: str) -> InputSequence:
        token_type = TokenType(args.tokens) if args.tokens else None
        if args.strings:
            return from_string(value, token_type or TokenType.CHAR, ignore_case=args.ignore_case)
        return read_input(value, token_type or TokenType.LINE, ignore_case=args.ignore_case)

    def _costs(self, args, source: InputSequence, target: InputSequence) -> CostModel:
        sub_cost = args.substitution_cost

        def substitution(a, b):
            return None if a == b else sub_cost

        return CostModel.for_sequences(
            source.elements, target.elements,
            deletion=lambda _i: args.deletion_cost,
            insertion=lambda _j: args.insertion_cost,
            substitution=substitution,
        )

    def _execute(self, args, out: TextIO, use_color: bool) -> int:
        source = self._load(args, args.source)
        target = self._load(args, args.target)
        if source.token_type != target.token_type:
            # one side fell back to bytes; compare both as bytes
            logger.info("Mixed text and binary inputs, comparing bytes")
            source = self._load_bytes(args, args.source)
            target = self._load_bytes(args, args.target)
        logger.info("Comparing %d %s tokens against %d", len(source), source.token_type.value, len(target))
        costs = self._costs(args, source, target)
        m, n = len(source), len(target)
        if args.transposed:
            matrix = build_matrix_t(m, n, costs=costs).transpose()
        else:
            matrix = build_matrix(m, n, costs=costs)
        dist = distance(matrix)
        if args.distance_only:
            out.write(f"{dist}\n")
        else:
            script = edit_script(matrix)
            config = FormatterConfig(width=args.width, use_color=use_color)
            formatter = FormatterFactory.create(args.format, config)
            formatter.format(script, source.display, target.display, source.name, target.name,
                             matrix=matrix, output=out)
        logger.info("Edit distance: %s", dist)
        return 0 if source.elements == target.elements else 1

    def _load_bytes(self, args, value: str) -> InputSequence:
        if args.strings:
            return from_string(value, TokenType.BYTE, ignore_case=args.ignore_case)
        return read_input(value, TokenType.BYTE, ignore_case=args.ignore_case)


def main(argv: Optional[List[str]] = None) -> int:
    app = CLIApplication()
    return app.run(argv)


if __name__ == '__main__':
    sys.exit(main())
