'''
Infix expression evaluator.

Evaluates arithmetic and boolean expressions given as text, e.g.
"max(1, 2^3, -cos(0)) * 3!", with operators and functions that can be added
or removed at run time, and $placeholders bound before evaluation.

Text goes through four stages on every evaluation: placeholder substitution,
lexing (with unary minus rewriting), shunting-yard reordering into RPN, and
evaluation on a stack machine. All values are floats.
'''

# TODO: Operators longer than one character (<=, >=, <>) need the lexer to
# try the longest registered symbol first.

from .cli import CLI
from .engine import Engine, Outcome, calculate
from .functions import Function, FunctionLibrary
from .lexer import Lexer
from .machine import Machine
from .operators import Associativity, Operator, OperatorLibrary
from .parser import Parser
from .substitution import Substitution
from .tokens import Kind, Token
from .util import (ExpressionError, LexicalError, ParenthesisError,
                   OperatorRegistrationError, MissingOperationError,
                   NumberFormatError, EmptyExpressionError, EvaluationError,
                   EvaluationArityError, EvaluationExcessError,
                   OperationArgumentError, BindingError, ComplexityError)


__all__ = ('Engine', 'Outcome', 'calculate', 'Function', 'FunctionLibrary',
           'Lexer', 'Machine', 'Associativity', 'Operator', 'OperatorLibrary',
           'Parser', 'Substitution', 'Kind', 'Token', 'CLI',
           'ExpressionError', 'LexicalError', 'ParenthesisError',
           'OperatorRegistrationError', 'MissingOperationError',
           'NumberFormatError', 'EmptyExpressionError', 'EvaluationError',
           'EvaluationArityError', 'EvaluationExcessError',
           'OperationArgumentError', 'BindingError', 'ComplexityError')
