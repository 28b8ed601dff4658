import sys

from .util import GenixError
from .expression import evaluate
from .terminal import StreamInput


class Calculator:
    '''
    Scientific calculator, one infix expression per line.
    '''

    BANNER = "Scientific Calculator (type 'exit' to return)"
    PROMPT = 'Enter expression: '
    EXIT = 'exit'

    def __init__(self, input=None, out=None, err=None):
        '''
        :param input: Where lines come from, anything with ask(prompt).
        :param out: Stream results are printed to.
        :param err: Stream errors are printed to.
        '''
        self.input = StreamInput() if input is None else input
        self.out = sys.stdout if out is None else out
        self.err = sys.stderr if err is None else err

    def run(self):
        '''
        Evaluate lines until exit or end of input.
        '''
        print(self.BANNER, file=self.out)
        while True:
            try:
                line = self.input.ask(self.PROMPT)
            except EOFError:
                self.error('Input error. Exiting calculator.')
                return
            if line == self.EXIT:
                print('Calculator session ended.', file=self.out)
                return
            if not line:
                continue
            self.feed(line)

    def feed(self, line):
        '''
        Evaluate one line, printing its result or error.

        Return the value, or None on error.
        '''
        try:
            value = evaluate(line)
        except GenixError as e:
            self.error(e.message)
            return None
        print('Result: {:.4f}'.format(value), file=self.out)
        return value

    def error(self, message):
        print('Error:', message, file=self.err)
