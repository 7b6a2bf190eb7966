from functools import wraps


class CalcError(Exception):
    '''
    Root of every error the pipeline raises on bad user input.

    :param message: Human readable description, printed verbatim.
    :param position: Offset into the input line, if known.
    :param token: Offending token, if any.
    '''
    kind = 'calculator'

    def __init__(self, message, position=None, token=None):
        super().__init__(message)
        self.message = message
        self.position = position
        self.token = token

    def __str__(self):
        return self.message


class LexError(CalcError):
    kind = 'lexical'


class ParseError(CalcError):
    kind = 'syntax'


class EvalError(CalcError):
    kind = 'evaluation'


class UndefinedVariable(EvalError):
    def __init__(self, name):
        super().__init__('Variable {} is not defined'.format(name))
        self.name = name


class DivisionByZero(EvalError):
    def __init__(self):
        super().__init__('Cannot divide by zero')


class InvalidFunction(EvalError):
    def __init__(self, name):
        super().__init__('Invalid function {!r}'.format(name))
        self.name = name


def wrap_user_errors(fmt):
    '''
    Decorator that converts unexpected exceptions to CalcErrors.

    Passes through CalcErrors. fmt is formatted with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
