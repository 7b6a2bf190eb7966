from pytest import Item, fixture

from trigcalc import evaluate, parse, tokenize


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion on calculator results, for auditing a run.

    Needs enable_assertion_pass_hook. Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def calc():
    '''
    Run an expression through the whole pipeline.
    '''
    def calculate(expression, env=None):
        return evaluate(parse(tokenize(expression)), env)
    return calculate
