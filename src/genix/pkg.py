'''
Toy package installer, keeping a registry of library names in the VFS.
'''

import logging
import sys

from .util import VFSError
from .terminal import StreamInput


logger = logging.getLogger(__name__)

REGISTRY_PATH = 'system/lib_registry.txt'


class Registry:
    '''
    Installed library names, unique regardless of case.
    '''
    def __init__(self, names=()):
        self.names = []
        self.dirty = False
        for name in names:
            self.add(name)
        self.dirty = False

    def __len__(self):
        return len(self.names)

    def __iter__(self):
        return iter(self.names)

    def __contains__(self, name):
        return self._index(name) is not None

    def _index(self, name):
        folded = name.casefold()
        for index, installed in enumerate(self.names):
            if installed.casefold() == folded:
                return index
        return None

    def add(self, name):
        '''
        Return False if name was already there.
        '''
        if name in self:
            return False
        self.names.append(name)
        self.dirty = True
        return True

    def remove(self, name):
        '''
        Return False if name wasn't there.
        '''
        index = self._index(name)
        if index is None:
            return False
        del self.names[index]
        self.dirty = True
        return True

    @classmethod
    def load(cls, vfs, path=REGISTRY_PATH):
        if not vfs.exists(path):
            return cls()
        registry = cls(line.strip()
                       for line in vfs.read(path).splitlines()
                       if line.strip())
        logger.debug('Loaded %d library name(s) from %s', len(registry), path)
        return registry

    def dumps(self):
        return ''.join(name + '\n' for name in self.names)

    def save(self, vfs, path=REGISTRY_PATH):
        vfs.write(path, self.dumps())
        self.dirty = False


class Installer:
    '''
    Package installer, either running one command or interactively.
    '''

    PROMPT = 'pkg> '
    HELP = 'Commands: install <name>, remove <name>, list, help, exit'

    def __init__(self, vfs, input=None, out=None, path=REGISTRY_PATH):
        '''
        :param vfs: Where the registry is loaded from and saved to.
        :param input: Where lines come from, anything with ask(prompt).
        :param out: Stream everything is printed to.
        '''
        self.vfs = vfs
        self.input = StreamInput() if input is None else input
        self.out = sys.stdout if out is None else out
        self.path = path
        self.registry = Registry()

    def print(self, *args, **kwargs):
        print(*args, file=self.out, **kwargs)

    def run(self, arguments=None):
        '''
        Run arguments as a single command if there are any, else prompt for
        commands until exit.
        '''
        self.registry = Registry.load(self.vfs, self.path)
        arguments = (arguments or '').strip()
        if arguments:
            self.execute(arguments, interactive=False)
            return
        self.interact()
        if self.registry.dirty:
            self.save()

    def interact(self):
        self.print('Package Installer (commands: install <name>, '
                   'remove <name>, list, help, exit)')
        while True:
            try:
                line = self.input.ask(self.PROMPT).strip()
            except EOFError:
                self.print('\nInput error. Exiting package installer.')
                return
            if not line:
                continue
            if line.lower() == 'exit':
                self.print('Package installer session ended.')
                return
            self.execute(line)

    def save(self):
        try:
            self.registry.save(self.vfs, self.path)
        except VFSError as e:
            logger.debug('Saving the registry failed', exc_info=e)
            self.print('Failed to update registry at', self.path)

    def execute(self, line, interactive=True):
        '''
        Run one command. Outside of interactive mode, changes are saved
        straight away.
        '''
        command, _, argument = line.strip().partition(' ')
        argument = argument.strip()
        command = command.lower()
        if command == 'install':
            changed = self.install(argument)
        elif command == 'remove':
            changed = self.remove(argument)
        elif command == 'list':
            changed = self.list()
        elif command == 'help':
            self.print(self.HELP)
            changed = False
        else:
            self.print('Unknown command:', line.strip().split(' ')[0])
            changed = False
        if changed and not interactive:
            self.save()

    def install(self, name):
        if not name:
            self.print('Usage: install <library>')
            return False
        if not self.registry.add(name):
            self.print("Library '{}' is already installed.".format(name))
            return False
        self.print('Installing library: {}\nDone.'.format(name))
        return True

    def remove(self, name):
        if not name:
            self.print('Usage: remove <library>')
            return False
        if not self.registry.remove(name):
            self.print("Library '{}' is not installed.".format(name))
            return False
        self.print('Removed library:', name)
        return True

    def list(self):
        if not self.registry:
            self.print('No libraries installed.')
            return False
        self.print('Installed libraries:')
        for name in self.registry:
            self.print('  -', name)
        return False
