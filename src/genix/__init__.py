'''
genix: a scientific calculator, a calendar and a package installer, behind a
tiny shell, all confined to a single project root.

The only part with any real substance is the calculator's expression
evaluator: infix in, lexed, shunted to postfix, then run on a value stack.

- Trigonometry is in degrees, as on a pocket calculator.
- Unary minus binds looser than ^ and !, so -2^2 is -4 and -3! is -6.
- ! binds tighter than ^, so 3!^2 is 36.
'''

from .cli import CLI
from .lexer import Lexer
from .shunter import Shunter
from .evaluator import Evaluator
from .expression import evaluate
from .vfs import VFS


__all__ = 'evaluate', 'Lexer', 'Shunter', 'Evaluator', 'VFS', 'CLI'
