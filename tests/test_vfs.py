'''
Sandboxed file access tests
'''

from genix.util import VFSError, SandboxError
from genix.vfs import VFS

from pytest import raises, mark


def test_init_creates_directories(tmp_path):
    vfs = VFS(tmp_path / 'root', sandbox=tmp_path / 'root' / 'sandbox')
    assert vfs.init() is vfs
    assert (tmp_path / 'root').is_dir()
    assert (tmp_path / 'root' / 'sandbox').is_dir()
    # Again, harmlessly.
    vfs.init()


def test_write_then_read(vfs):
    vfs.write('home/user/notes.txt', 'hello\n')
    assert vfs.read('home/user/notes.txt') == 'hello\n'
    assert vfs.exists('home/user/notes.txt')
    assert (vfs.root / 'home' / 'user' / 'notes.txt').read_text() == 'hello\n'


def test_write_replaces(vfs):
    vfs.write('a.txt', 'one')
    vfs.write('a.txt', 'two')
    assert vfs.read('a.txt') == 'two'


def test_list(vfs):
    for name in 'b.txt', 'a.txt', 'c/d.txt':
        vfs.write(name, '')
    assert vfs.list() == ['a.txt', 'b.txt', 'c']
    assert vfs.list('c') == ['d.txt']


@mark.parametrize('path', ['../outside.txt', '/etc/passwd', 'a/../../b'])
def test_sandbox(vfs, path):
    with raises(SandboxError, match='is outside of'):
        vfs.read(path)
    with raises(SandboxError):
        vfs.write(path, 'nope')
    with raises(SandboxError):
        vfs.list(path)


def test_dotdot_inside_root_is_fine(vfs):
    vfs.write('a/../b.txt', 'fine')
    assert vfs.read('b.txt') == 'fine'


def test_missing_file(vfs):
    assert not vfs.exists('missing.txt')
    with raises(VFSError, match="Cannot read 'missing.txt'") as info:
        vfs.read('missing.txt')
    assert isinstance(info.value.__cause__, FileNotFoundError)


def test_missing_directory(vfs):
    with raises(VFSError, match='Cannot open directory'):
        vfs.list('nowhere')
