'''
Files under a project root, and nowhere else.

Paths handed to the VFS are always relative to its root. Anything that would
resolve outside of it, through .. or a symlink, is refused.
'''

from pathlib import Path
import logging

from .util import VFSError, SandboxError, wrap_user_errors


logger = logging.getLogger(__name__)


class VFS:
    def __init__(self, root, sandbox=None):
        '''
        :param root: Directory every path is relative to.
        :param sandbox: Scratch directory, created alongside the root.
        '''
        self.root = Path(root).expanduser()
        self.sandbox = None if sandbox is None else Path(sandbox).expanduser()

    @wrap_user_errors('Cannot create {0.root}', VFSError)
    def init(self):
        '''
        Create the root and sandbox directories if missing.
        '''
        for directory in self.root, self.sandbox:
            if directory is not None:
                directory.mkdir(parents=True, exist_ok=True)
                logger.debug('Initialized %s', directory)
        return self

    def resolve(self, path=''):
        '''
        Return the real location of path, refusing to leave the root.
        '''
        root = self.root.resolve()
        full = (root / path).resolve()
        if full != root and root not in full.parents:
            raise SandboxError('Path {!r} is outside of {}'
                               .format(str(path), root))
        return full

    @wrap_user_errors('Cannot open directory', VFSError)
    def list(self, path=''):
        '''
        Return the sorted names in a directory.
        '''
        full = self.resolve(path)
        return sorted(entry.name for entry in full.iterdir())

    @wrap_user_errors('Cannot read {1!r}', VFSError)
    def read(self, path):
        full = self.resolve(path)
        logger.debug('Reading %s', full)
        return full.read_text()

    @wrap_user_errors('Cannot write {1!r}', VFSError)
    def write(self, path, content):
        '''
        Replace the contents of a file, creating its directory if needed.
        '''
        full = self.resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        logger.debug('Writing %d characters to %s', len(content), full)
        full.write_text(content)

    def exists(self, path):
        return self.resolve(path).exists()
