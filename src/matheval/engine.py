from collections import namedtuple
import logging

from .functions import FunctionLibrary
from .lexer import Lexer
from .machine import Machine
from .operators import OperatorLibrary, Associativity
from .parser import Parser
from .substitution import Substitution
from .util import ExpressionError, EmptyExpressionError


log = logging.getLogger(__name__)


Outcome = namedtuple('Outcome', 'value error history')


class Engine:
    '''
    Expression evaluation engine.

    Owns the operator and function registries and the placeholder bindings,
    and runs substitution, lexing, reordering and evaluation on each call.
    Bindings persist across calls until changed.
    '''

    DEFAULT_EPSILON = OperatorLibrary.DEFAULT_EPSILON
    DEFAULT_MAX_DEPTH = None
    DEFAULT_MAX_TOKENS = None

    def __init__(self, expression='', *, operators=None, functions=None,
                 epsilon=None, verbose=False, max_depth=None,
                 max_tokens=None):
        '''
        Create engine with standard registries, unless given some.

        :param epsilon: Tolerance of = in the standard operators; 0 for exact.
        :param verbose: Keep a step by step trace of each evaluation.
        :param max_depth: Limit on parenthesis nesting.
        :param max_tokens: Limit on the number of tokens.
        '''
        cls = type(self)
        if operators is None:
            operators = OperatorLibrary(cls.DEFAULT_EPSILON
                                        if epsilon is None
                                        else epsilon)
        if functions is None:
            functions = FunctionLibrary()
        self.operator_library = operators
        self.function_library = functions
        self.substitution = Substitution()
        self.verbose = verbose
        self.max_depth = cls.DEFAULT_MAX_DEPTH if max_depth is None \
            else max_depth
        self.max_tokens = cls.DEFAULT_MAX_TOKENS if max_tokens is None \
            else max_tokens
        self.history = []
        self._expression = expression
        self._result = None

    def set_expression(self, expression):
        '''
        Set the expression evaluate() works on.
        '''
        self._expression = expression
        self._result = None

    @property
    def expression(self):
        return self._expression

    @property
    def result(self):
        '''
        Result of the stored expression, evaluating it if not yet done.
        '''
        if self._result is None:
            self.evaluate()
        return self._result

    def evaluate_expression(self, expression):
        self.set_expression(expression)
        return self.evaluate()

    def evaluate(self, expression=None):
        '''
        Evaluate the given, or else the stored, expression.

        Raises ExpressionError subclasses on any malformed input.
        '''
        if expression is not None:
            self.set_expression(expression)
        log.debug('Input:   %s', self._expression)
        text = self.substitution.apply(self._expression)
        log.debug('Replace: %s', text)

        lexer = Lexer(self.operator_library, max_tokens=self.max_tokens)
        tokens = lexer.tokenize(text)
        if not tokens:
            raise EmptyExpressionError('No valid input given')

        rpn = Parser(self.operator_library, max_depth=self.max_depth) \
            .to_postfix(tokens)
        machine = Machine(self.operator_library, self.function_library,
                          verbose=self.verbose)
        try:
            self._result = machine.run(rpn)
        finally:
            self.history = machine.history
            for line in self.history:
                log.debug(line)
        log.debug('Result:  %s', self._result)
        return self._result

    def attempt(self, expression=None):
        '''
        Evaluate like evaluate(), but return an Outcome instead of raising.
        '''
        self.history = []
        try:
            value = self.evaluate(expression)
        except ExpressionError as e:
            return Outcome(None, e, list(self.history))
        return Outcome(value, None, list(self.history))

    def add_operator(self, symbol, function, arity=2, precedence=2,
                     associativity=Associativity.LEFT):
        '''
        Register an operator.

        :param function: Callable taking a list of arity numbers, leftmost
                         operand first, and returning a number.
        :param precedence: 2 for + -, 3 for * / %, 4 for ^.
        '''
        if isinstance(symbol, str):
            symbol = symbol.lower()
        self.operator_library.add(symbol, function, arity, precedence,
                                  associativity)

    def remove_operator(self, symbol):
        self.operator_library.remove(symbol.lower())

    def add_function(self, name, function, arity=None, text=False):
        '''
        Register a function under a case-insensitive name.

        :param function: Callable taking the list of call arguments.
        :param arity: Required argument count, None for any.
        :param text: Whether string arguments are passed through.
        '''
        self.function_library.add(name, function, arity, text)

    def remove_function(self, name):
        self.function_library.remove(name)

    def operators(self):
        return list(self.operator_library)

    def functions(self):
        return list(self.function_library)

    def add_replacement(self, key, value=None):
        self.substitution.add_replacement(key, value)

    def clear_replacements(self):
        self.substitution.clear_replacements()

    def set_arguments(self, arguments):
        self.substitution.set_arguments(arguments)

    def add_argument(self, argument):
        self.substitution.add_argument(argument)

    def clear_arguments(self):
        self.substitution.clear_arguments()


def calculate(expression):
    '''
    Evaluate an expression with a fresh, standard engine.
    '''
    return Engine(expression).evaluate()
