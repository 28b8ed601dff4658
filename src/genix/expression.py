'''
Infix expression evaluation: lex, shunt, then run the postfix.

Every call builds its own lexer, shunter and evaluator state, so evaluate()
is safe to call from several threads at once.
'''

from .lexer import Lexer
from .shunter import Shunter
from .evaluator import Evaluator


def infix(source, *, lexer=None):
    '''
    Return the infix token list of source.
    '''
    return list((lexer or Lexer()).lex(source))


def postfix(source, *, lexer=None, shunter=None):
    '''
    Return the postfix token list of source.
    '''
    return (shunter or Shunter()).shunt(infix(source, lexer=lexer))


def evaluate(source, *, lexer=None, shunter=None, evaluator=None):
    '''
    Evaluate an infix expression and return its value.

    Raises the first GenixError any phase runs into.
    '''
    return (evaluator or Evaluator()).evaluate(
        postfix(source, lexer=lexer, shunter=shunter))
