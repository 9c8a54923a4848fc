from collections import namedtuple
from enum import Enum


class Kind(Enum):
    '''
    Kinds of lexeme flowing through the pipeline.
    '''
    OPEN = 'Open'
    CLOSE = 'Close'
    LISTSEP = 'ListSep'
    OPERATOR = 'Operator'
    NUMBER = 'Number'
    FUNCTION = 'Function'
    # Synthetic, emitted by the parser ahead of a function call
    ARGS = 'Args'
    STRING = 'String'


class Token(namedtuple('Token', 'value kind')):
    __slots__ = ()

    def __str__(self):
        if self.kind is Kind.ARGS:
            return '{}>'.format(self.value)
        if self.kind is Kind.STRING:
            return repr(self.value)
        return self.value


# Characters with fixed meaning, never usable as operators.
STRUCTURAL = {
    '(': Kind.OPEN,
    ')': Kind.CLOSE,
    ',': Kind.LISTSEP,
}
