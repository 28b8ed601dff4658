from functools import wraps


class GenixError(Exception):
    '''
    Base of every error the user is meant to see.

    The first argument is always the human readable message.
    '''
    def __init__(self, message, *args, position=None):
        super().__init__(message, *args)
        self.position = position

    @property
    def message(self):
        return self.args[0]

    def __str__(self):
        return self.message


class LexError(GenixError):
    pass


class ParseError(GenixError):
    pass


class DomainError(GenixError):
    pass


class ArityError(GenixError):
    pass


class CapacityError(GenixError):
    pass


class VFSError(GenixError):
    pass


class SandboxError(VFSError):
    pass


class CommandNotFound(GenixError):
    pass


def wrap_user_errors(fmt, error=GenixError):
    '''
    Ugly hack decorator that converts foreign exceptions to user errors.

    Passes through GenixErrors. The original exception is chained.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except GenixError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
