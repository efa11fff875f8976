# © 2025. Triad National Security, LLC. All rights reserved.

# This program was produced under U.S. Government contract 89233218CNA000001 for
# Los Alamos National Laboratory (LANL), which is operated by Triad National
# Security, LLC for the U.S. Department of Energy/National Nuclear Security
# Administration. All rights in the program are reserved by Triad National
# Security, LLC, and the U.S. Department of Energy/National Nuclear Security
# Administration. The Government is granted for itself and others acting on its
# behalf a nonexclusive, paid-up, irrevocable worldwide license in this material
# to reproduce, prepare. derivative works, distribute copies to the public,
# perform publicly and display publicly, and to permit others to do so.

from mpi4py import MPI

import sys
from traceback import print_stack
from math import floor, log10
import argparse
from numbers import Real

__all__ = []

comm = MPI.COMM_WORLD


class MPI_Debugging:
    """A "Mixin" class to add rank-0 output and collective abort methods to
    any class with an `MPI.Comm` instance stored as the attribute
    `self.comm`.

    """
    def print(self, string, flush=False):
        """Have rank 0 write `string` to `stdout`.

        """
        if self.comm.rank == 0:
            print(string, flush=flush)

    def soft_abort(self, string, code=1):
        """All tasks exit program with exit code `code` after rank 0 prints
        `string` and a stack trace to `stdout`.

        """
        if self.comm.rank == 0:
            print(string, flush=True)
            print_stack()

        sys.exit(code)

    def all_assert(self, test, string=""):
        """Allreduce `test` and exit program via `soft_abort` if False.

        """
        test = self.comm.allreduce(bool(test), op=MPI.LAND)
        if test is False:
            self.soft_abort(string)

    def soft_assert(self, test, string=""):
        """If ``test is False`` then exit program via `soft_abort`.

        .. warning:: `soft_assert` assumes every MPI task receives an
        identical value for `test`. Use `all_assert` for rank-local tests.

        """
        if test is False:
            self.soft_abort(string)


class FileArgParser(argparse.ArgumentParser):
    """`ArgumentParser` whose ``@file`` arguments hold one ``key = value``
    pair per line, with ``#`` comments. Values of ``true``/``false`` become
    the ``--key``/``--no-key`` switches.

    """
    def convert_arg_line_to_args(self, raw_line):
        args = []
        line = raw_line.strip().split('#')[0]
        if line:
            key, val = [kv.strip() for kv in line.strip().split('=')]

            if val.lower() == 'true':
                args.append(f'--{key}')

            elif val.lower() == 'false':
                args.append(f'--no-{key}')

            else:
                args.extend((f'--{key}', val))

        return args


def new_parser():
    """Returns an empty `FileArgParser` configured the same way for every
    class-level parser in the package.

    """
    return FileArgParser(
        fromfile_prefix_chars='@',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS)


def parse_config(parser, args=None, comm=comm):
    """Parse `args` (default ``sys.argv``) with `parser` on rank 0 and
    broadcast the resulting `argparse.Namespace` to every rank.

    Unknown options are ignored so that host and model parsers can share
    one command line.

    """
    if comm.rank == 0:
        config = parser.parse_known_args(args)[0]
    else:
        config = None

    return comm.bcast(config, root=0)


def enf(x, p=5):
    """
    TAKEN FROM STACKOVERFLOW (answer from user `poppie`), and then updated to
    use f-strings.
    <https://stackoverflow.com/questions/17973278>

    Returns float/int value `x` formatted in a simplified engineering format -
    using an exponent that is a multiple of 3.
    """
    x = float(x)
    sign = " "

    if x < 0:
        x = -x
        sign = "-"

    if x == 0:
        exp3 = 0
        x3 = 0
    else:
        exp = int(floor(log10(x)))
        exp3 = exp - (exp % 3)
        x3 = x / (10 ** exp3)
        x3 = round(x3, -int(floor(log10(x3)) - (p-1)))

    x3_str = f"{x3:{p+1}.{p}f}"[:p+1]

    if exp3 == 0:
        exp3_str = "   "
    else:
        exp3_str = f"e{exp3:<+02d}"

    return f"{sign}{x3_str}{exp3_str}"


def is_number(value, kind=Real):
    """True if `value` is an instance of the `numbers` ABC `kind`,
    excluding booleans.

    """
    return isinstance(value, kind) and not isinstance(value, bool)
