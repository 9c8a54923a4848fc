'''
Infix to postfix (RPN) reordering, by the shunting-yard algorithm.

https://en.wikipedia.org/wiki/Shunting-yard_algorithm

Extended for variadic calls: every call is preceded in the output by an Args
token carrying the number of arguments it was written with.
'''

from .operators import Associativity
from .tokens import Kind, Token
from .util import ParenthesisError, MissingOperationError, ComplexityError


class Parser:
    '''
    Reorders tokens, looking up operator precedence and associativity in the
    registry it was given.
    '''

    def __init__(self, operators, max_depth=None):
        self.operators = operators
        self.max_depth = max_depth

    def _operator(self, token):
        entry = self.operators.get(token.value)
        if entry is None:
            raise MissingOperationError(
                'Invalid operator: {}'.format(token.value))
        return entry

    def _yields(self, o1, o2):
        '''
        Return True if operator o1 arriving must first pop o2 to the output.
        '''
        o1, o2 = self._operator(o1), self._operator(o2)
        if o1.associativity is Associativity.LEFT:
            return o1.precedence <= o2.precedence
        return o1.precedence < o2.precedence

    def to_postfix(self, tokens):
        '''
        Return tokens reordered into RPN.

        Raises ParenthesisError on unbalanced parentheses and separators
        outside a parenthesis.
        '''
        tokens = list(tokens)
        queue = []
        stack = []
        # Argument count per open parenthesis, innermost last
        arguments = []

        for i, token in enumerate(tokens):
            kind = token.kind
            following = tokens[i + 1] if i + 1 < len(tokens) else None

            if kind in (Kind.NUMBER, Kind.STRING):
                queue.append(token)

            elif kind is Kind.FUNCTION:
                if following is not None and following.kind is Kind.OPEN:
                    stack.append(token)
                else:
                    # Bare name: call with no arguments, e.g. 2*pi
                    queue.append(Token('0', Kind.ARGS))
                    queue.append(token)

            elif kind is Kind.LISTSEP:
                if not arguments:
                    raise ParenthesisError(
                        'Separator outside of parentheses')
                arguments[-1] += 1
                while stack and stack[-1].kind is not Kind.OPEN:
                    queue.append(stack.pop())
                if not stack:
                    raise ParenthesisError('Mismatched parentheses')

            elif kind is Kind.OPERATOR:
                while (stack and stack[-1].kind is Kind.OPERATOR and
                       self._yields(token, stack[-1])):
                    queue.append(stack.pop())
                stack.append(token)

            elif kind is Kind.OPEN:
                if (self.max_depth is not None and
                        len(arguments) >= self.max_depth):
                    raise ComplexityError(
                        'Parentheses nested deeper than {}'.format(
                            self.max_depth))
                arguments.append(1)
                stack.append(token)

            elif kind is Kind.CLOSE:
                while stack and stack[-1].kind is not Kind.OPEN:
                    queue.append(stack.pop())
                if not stack:
                    raise ParenthesisError('Mismatched parentheses')
                stack.pop()
                count = arguments.pop()
                # f() is a call without arguments
                if i > 0 and tokens[i - 1].kind is Kind.OPEN:
                    count = 0
                if stack and stack[-1].kind is Kind.FUNCTION:
                    queue.append(Token(str(count), Kind.ARGS))
                    queue.append(stack.pop())

            elif kind is Kind.ARGS:
                raise ValueError('Args tokens are only produced here')

            else:
                raise ValueError('Unhandled token kind {}'.format(kind))

        while stack:
            if stack[-1].kind is Kind.OPEN:
                raise ParenthesisError('Mismatched parentheses')
            queue.append(stack.pop())

        return queue
