'''
Postfix (RPN) evaluation.

https://en.wikipedia.org/wiki/Reverse_Polish_notation
'''

from .tokens import Kind
from .util import (NumberFormatError, MissingOperationError,
                   EvaluationArityError, EvaluationExcessError,
                   EvaluationError, format_number)


class Machine:
    '''
    Stack machine running RPN token sequences against operator and function
    registries.

    Holds no state between runs other than the trace of the last one.
    '''

    def __init__(self, operators, functions, verbose=False):
        '''
        :param verbose: Record a step by step trace in history.
        '''
        self.operators = operators
        self.functions = functions
        self.verbose = verbose
        self.history = []

    def _record(self, token, stack):
        if not self.verbose:
            return
        rows = ['{:<10}{:<10}'.format(str(token), token.kind.value)]
        # Top of the stack first
        for value in reversed(stack):
            rows.append('{:<20}{}'.format('', format_number(value)))
        if len(rows) > 1:
            rows[0] += rows.pop(1).lstrip()
        self.history.extend(rows)

    def _parse(self, text):
        '''
        Convert a number token, independently of locale.
        '''
        try:
            return float(text)
        except ValueError:
            raise NumberFormatError(
                'Incorrectly formatted number: ' + text) from None

    def _popstack(self, stack, n):
        '''
        Pop n values from the stack, leftmost operand first.
        '''
        if len(stack) < n:
            raise EvaluationArityError(
                'Insufficient values in the expression: need {}, have {}'
                .format(n, len(stack)))
        # If you don't reverse, you'll do 2**9 when you say 9 2 ^ instead of
        # 9**2.
        values = [stack.pop() for _ in range(n)]
        values.reverse()
        return values

    def run(self, rpn):
        '''
        Evaluate RPN tokens and return the single value left on the stack.
        '''
        rpn = list(rpn)
        self.history = []
        if self.verbose:
            self.history.append('Postfix: ' + ' '.join(map(str, rpn)))
            self.history.append('')
            self.history.append('{:<10}{:<10}{}'.format('Input', 'Operation',
                                                        'Stack'))
        stack = []
        # Argument count announced by the last Args token
        pending = None

        for token in rpn:
            kind = token.kind

            if kind is Kind.NUMBER:
                stack.append(self._parse(token.value))

            elif kind is Kind.STRING:
                stack.append(token.value)

            elif kind is Kind.OPERATOR:
                entry = self.operators.get(token.value)
                if entry is None:
                    raise MissingOperationError(
                        'Unknown operator: ' + token.value)
                values = self._popstack(stack, entry.arity)
                stack.append(entry(values))

            elif kind is Kind.FUNCTION:
                entry = self.functions.get(token.value)
                if entry is None:
                    raise MissingOperationError(
                        'Unknown function: ' + token.value)
                n = pending or 0
                pending = None
                values = self._popstack(stack, n)
                stack.append(entry(values))

            elif kind is Kind.ARGS:
                pending = int(token.value)

            elif kind in (Kind.OPEN, Kind.CLOSE, Kind.LISTSEP):
                raise EvaluationError(
                    'Unexpected {} in postfix'.format(token.value))

            else:
                raise ValueError('Unhandled token kind {}'.format(kind))

            self._record(token, stack)

        if not stack:
            raise EvaluationArityError('Insufficient values in the expression')
        if len(stack) > 1:
            raise EvaluationExcessError(
                'Too many values in the expression: {}'.format(
                    ' '.join(map(format_number, stack))))
        result = stack[0]
        if isinstance(result, str):
            raise EvaluationError('Invalid return type: string={}'.format(
                result))
        return result
