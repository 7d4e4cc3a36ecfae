from rich.pretty import pprint

from optionals import *

__prog__ = "optionals-demo"


def lookup(table, key):
    return of(table.get(key))


if __name__ == '__main__':
    table = {"name": "hello", "empty": None}
    pprint([lookup(table, key).map(len) for key in table | {"missing": 0}])
    try:
        lookup(table, "missing").get()
    except ElementNotFoundError as fault:
        report(fault, fancy=True)
