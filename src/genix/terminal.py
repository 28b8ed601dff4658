'''
Line input for the applications.

Everything that reads user input takes one of these, and only ever calls
ask(prompt) on it. ask() raises EOFError once the input is exhausted.
'''

from os import path
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory


def _chomp(line):
    return line.rstrip('\r\n')


class InteractiveInput:
    '''
    Prompting, line editing input on a terminal.
    '''
    def __init__(self, prompt='', history=None):
        '''
        :param prompt: Prompt to show when ask() is not given one.
        :param history: File to keep history in, or None to keep it in
                        memory.
        '''
        self.prompt = prompt
        self.history = history
        self._session = None

    @property
    def session(self):
        if self._session is None:
            if self.history is None:
                history = InMemoryHistory()
            else:
                history = FileHistory(path.expanduser(self.history))
            self._session = PromptSession(message=self.prompt,
                                          history=history,
                                          enable_suspend=True,
                                          enable_open_in_editor=True,
                                          # Certainly not! But be explicit.
                                          erase_when_done=False)
        return self._session

    def ask(self, prompt=None):
        return _chomp(self.session.prompt(
            self.prompt if prompt is None else prompt))


class StreamInput:
    '''
    Input from a plain stream (pipe, file, StringIO).

    Prompts are only written if there is somewhere to write them to.
    '''
    def __init__(self, stream=None, out=None, prompt=''):
        self.stream = sys.stdin if stream is None else stream
        self.out = out
        self.prompt = prompt

    def ask(self, prompt=None):
        if self.out is not None:
            print(self.prompt if prompt is None else prompt,
                  end='', flush=True, file=self.out)
        line = self.stream.readline()
        if not line:
            raise EOFError
        return _chomp(line)
