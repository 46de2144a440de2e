from collections import abc
from typing import Any, Optional, Protocol

from .params import PageParams


class Page(Protocol):
    """ A page of rows: a resource that yields rows and has to be released

    A SqlAlchemy `Result` is a page. So is any object with these two methods.
    """

    def fetchone(self) -> Optional[Any]:
        """ Get the next row, or `None` when there are no more rows """

    def close(self) -> None:
        """ Release the resource. Must be idempotent """


# Annotation for a query callback: gets a page descriptor, returns a page of rows
QueryCallback = abc.Callable[[PageParams], Page]

# Annotation for dict rows (result rows returned as dicts)
SARowDict = dict
