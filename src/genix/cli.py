from os import environ, isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from .util import GenixError
from .lexer import Lexer
from .expression import infix, postfix
from .calculator import Calculator
from .shell import Shell
from .terminal import InteractiveInput, StreamInput
from .vfs import VFS


logger = logging.getLogger(__name__)


class CLI:
    '''
    Command line interface to the genix shell and calculator.
    '''

    DEFAULT_PROMPT = Shell.PROMPT
    DEFAULT_ROOT = '~/.genix'
    ROOT_VARIABLE = 'GENIX_ROOT'
    HISTORY_FILE = '~/.genix_history'

    def dumper(self):
        '''
        Dump the infix and postfix tokens of each expression.
        '''
        print('<source>\t<infix>\t<postfix>')
        for line in self.args.expressions:
            try:
                print(repr(line),
                      ' '.join(map(str, infix(line))),
                      ' '.join(map(str, postfix(line))),
                      sep='\t')
            except GenixError as e:
                print(repr(line), 'Error: ' + e.message, sep='\t',
                      file=sys.stderr)

    def executor(self):
        '''
        Evaluate expressions given on the command line.
        '''
        calculator = Calculator(out=sys.stdout, err=sys.stderr)
        failed = False
        for line in self.args.expressions:
            failed |= calculator.feed(line) is None
        return 1 if failed else 0

    def shell(self):
        '''
        Run a single shell command, or the interactive shell.
        '''
        vfs = self._vfs()
        shell = Shell(vfs, input=self._prompting_input(),
                      prompt=self.args.prompt or self.DEFAULT_PROMPT)
        if self.args.command is None:
            return shell.run()
        try:
            print(shell.execute(self.args.command), end='')
        except GenixError as e:
            print(e.message, file=sys.stderr)
            return 1

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _vfs(self):
        root = self.args.root or environ.get(self.ROOT_VARIABLE,
                                             self.DEFAULT_ROOT)
        logger.debug('Using root %s', root)
        return VFS(root, sandbox=path.join(path.expanduser(root),
                                           'sandbox')).init()

    def _isatty(self):
        try:
            return isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno())
        except (OSError, ValueError):
            # Not even a file, e.g. replaced by a test harness.
            return False

    def _prompting_input(self):
        '''
        Return line input that prompts, if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or self._isatty():
            return InteractiveInput(history=self.HISTORY_FILE)
        else:
            return StreamInput(sys.stdin)

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Calculator, calendar and package installer')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log debugging output')
        self.argument_parser.add_argument('-r', '--root',
                                          help='project root, defaults to '
                                               '$' + self.ROOT_VARIABLE +
                                               ' or ' + self.DEFAULT_ROOT)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='evaluate expressions and exit')
        int_nonint_groups.add_argument('-c', '--command',
                                       help='run one shell command and exit')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT,
                                       help='prompt even if not on a tty')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=None, expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        action = self.args.action
        if action is None:
            action = self.shell if self.args.expressions is None \
                else self.executor
        elif action == self.dumper and self.args.expressions is None:
            self.args.expressions = [line.rstrip('\r\n')
                                     for line in sys.stdin]
        try:
            return action() or 0
        except GenixError as e:
            if self.args.verbose:
                logger.exception('Aborted')
            print(e.message, file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            return 1


def main():
    sys.exit(CLI().run())
