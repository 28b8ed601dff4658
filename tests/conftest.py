from io import StringIO

from pytest import Item, fixture

from genix.terminal import StreamInput
from genix.vfs import VFS


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP, and enable_assertion_pass_hook set.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def vfs(tmp_path):
    '''
    Empty, initialized VFS rooted in a temporary directory.
    '''
    return VFS(tmp_path / 'root').init()


@fixture
def lines():
    '''
    Make line input out of strings, as if typed one per line.
    '''
    def make(*typed, out=None):
        return StreamInput(StringIO(''.join(line + '\n' for line in typed)),
                           out=out)
    return make
