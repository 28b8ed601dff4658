import logging
import sys

from .util import GenixError, CommandNotFound
from .calculator import Calculator
from .calendar import Calendar
from .pkg import Installer
from .terminal import StreamInput


logger = logging.getLogger(__name__)


class Shell:
    '''
    Dispatches command lines to the applications.
    '''

    PROMPT = 'genix$ '
    HELP = 'Commands: calc, calendar, pkg [command], ls [path], help, exit\n'

    def __init__(self, vfs, input=None, out=None, err=None, prompt=PROMPT):
        '''
        :param vfs: Files the applications get to see.
        :param input: Where lines come from, anything with ask(prompt). Shared
                      with the applications.
        :param out: Stream output is printed to.
        :param err: Stream errors are printed to.
        :param prompt: Shown before each command line.
        '''
        self.vfs = vfs
        self.input = StreamInput() if input is None else input
        self.out = sys.stdout if out is None else out
        self.err = sys.stderr if err is None else err
        self.prompt = prompt

    def calc(self, arguments):
        Calculator(self.input, self.out, self.err).run()
        return 'Calculator closed.\n'

    def calendar(self, arguments):
        Calendar(self.vfs, self.input, self.out).run()
        return 'Calendar closed.\n'

    def pkg(self, arguments):
        Installer(self.vfs, self.input, self.out).run(arguments)
        return 'Package installer finished.\n'

    def ls(self, arguments):
        return ''.join(name + '\n' for name in self.vfs.list(arguments))

    def help(self, arguments):
        return self.HELP

    COMMANDS = {
        'calc': calc,
        'calendar': calendar,
        'pkg': pkg,
        'ls': ls,
        'help': help,
    }

    def execute(self, command):
        '''
        Run a command line and return its output.
        '''
        name, _, arguments = command.strip().partition(' ')
        if not name:
            return ''
        try:
            action = type(self).COMMANDS[name]
        except KeyError:
            raise CommandNotFound('{}: command not found'
                                  .format(command.strip())) from None
        logger.debug('Running %s %r', name, arguments.strip())
        return action(self, arguments.strip())

    def run(self):
        '''
        Prompt for commands until exit or end of input.
        '''
        while True:
            try:
                line = self.input.ask(self.prompt)
            except EOFError:
                return
            if line.strip() == 'exit':
                return
            try:
                print(self.execute(line), end='', file=self.out)
            except GenixError as e:
                print(e.message, file=self.err)
