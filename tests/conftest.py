from pytest import Item, fixture

from matheval import Engine, FunctionLibrary, Lexer, OperatorLibrary, Parser


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Needs enable_assertion_pass_hook; use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def operators():
    return OperatorLibrary()


@fixture
def functions():
    return FunctionLibrary()


@fixture
def lexer(operators):
    return Lexer(operators)


@fixture
def parser(operators):
    return Parser(operators)


@fixture
def engine():
    return Engine()
