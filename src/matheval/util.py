from functools import wraps


class ExpressionError(Exception):
    '''
    Base of every error raised while binding, lexing, reordering or
    evaluating an expression.
    '''
    pass


class LexicalError(ExpressionError):
    pass


class ParenthesisError(ExpressionError):
    pass


class OperatorRegistrationError(ExpressionError):
    pass


class MissingOperationError(ExpressionError):
    pass


class NumberFormatError(ExpressionError):
    pass


class EmptyExpressionError(ExpressionError):
    pass


class EvaluationError(ExpressionError):
    pass


class EvaluationArityError(EvaluationError):
    pass


class EvaluationExcessError(EvaluationError):
    pass


class OperationArgumentError(ExpressionError):
    pass


class BindingError(ExpressionError):
    pass


class ComplexityError(ExpressionError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator converting errors raised by operator and function bodies into
    OperationArgumentErrors.

    Passes through ExpressionErrors. The format string is given the
    positional arguments of the wrapped callable.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ExpressionError:
                raise
            except (ArithmeticError, ValueError, TypeError, IndexError) as e:
                raise OperationArgumentError(
                    '{}: {}'.format(fmt.format(*args, **kwargs), e)) from e
        return wrapper
    return decorator


def format_number(value):
    '''
    Render a number as text that lexes back to the same value.
    '''
    if isinstance(value, str):
        return value
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text
