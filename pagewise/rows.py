""" PagedRows: iterate over a large result set, page by page

Databases typically collect the whole result set before they start streaming it to the client.
With large result sets, this means a long wait before the first row arrives.
Breaking the query into pages of LIMIT rows fixes that: the first page arrives quickly,
and the next one is only requested when the previous one is used up.
"""

from __future__ import annotations

import logging
from collections import abc
from typing import Any, Optional

from . import exc
from .params import PageParams
from .typing import Page, QueryCallback, SARowDict


logger = logging.getLogger(__name__)


class PagedRows:
    """ Rows of a query, loaded in pages of `limit` rows

    The query callback is invoked once per page with a `PageParams` that tells which page to load.
    The query must be ordered so that pages are consistent with one another and can return all rows.
    Pages stop when there is an error, or when the query returns fewer rows than `limit`.

    Example:
        def query(p: PageParams):
            return connection.execute(sa.select(User).order_by(User.id).offset(p.offset).limit(p.limit))

        with PagedRows(1000, query) as rows:
            while rows.advance():
                print(rows.row)

            if rows.err is not None:
                raise rows.err

    Or, the Python way:

        with PagedRows.of(1000, query) as rows:
            for row in rows:
                print(row)
    """
    __slots__ = 'query', 'params', 'page', 'count', 'row', 'pages_fetched', '_err'

    # The callback that loads a page
    query: QueryCallback

    # Descriptor of the current page
    params: PageParams

    # The current page. `None` when closed.
    page: Optional[Page]

    # The number of rows consumed from the current page
    count: int

    # The current row: the one that `advance()` has moved to
    row: Optional[Any]

    # The number of times `query` was invoked
    pages_fetched: int

    # The error that has ended the iteration
    _err: Optional[BaseException]

    def __init__(self, limit: int, query: QueryCallback):
        """ Start a query in pages of `limit` rows

        The first page is fetched right away. If it fails, the error is available as `err`.

        Raises:
            exc.InvalidLimitError: `limit` is not a positive integer
        """
        # Validate. Without this, a zero limit would never give a short page, and we'd loop forever.
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise exc.InvalidLimitError(limit)

        self.query = query
        self.params = PageParams(limit=limit, offset=0)
        self.page = None
        self.count = 0
        self.row = None
        self.pages_fetched = 0
        self._err = None

        # Fetch the first page now, so that setup errors are reported immediately
        self._fetch_page()

    @classmethod
    def of(cls, limit: int, query: QueryCallback) -> PagedRows:
        """ Start a query in pages of `limit` rows; raise if the first page fails

        Raises:
            exc.InvalidLimitError: `limit` is not a positive integer
            Exception: whatever the query callback has raised
        """
        rows = cls(limit, query)
        if rows.err is not None:
            raise rows.err
        return rows

    @property
    def err(self) -> Optional[BaseException]:
        """ The error that has stopped the iteration, if any

        `None` means that there was no error: if `advance()` returned `False`, all rows have been read.
        Once set, it never changes.
        """
        return self._err

    def advance(self) -> bool:
        """ Move to the next row. Load the next page when the current one is used up.

        Returns:
            `True` if `row` now holds a new row; `False` if there are no more rows, or there was an error
        """
        if self._err is not None or self.page is None:
            return False

        if self._read_row():
            return True

        # Page exhausted? Go to the next one. Unless it has failed.
        if self._err is not None:
            return False
        return self._next_page()

    def close(self):
        """ Release the current page. Can be called many times. """
        page, self.page = self.page, None
        if page is not None:
            page.close()

    # Iteration

    def __iter__(self) -> abc.Iterator[Any]:
        """ Iterate over the remaining rows

        Raises:
            Exception: the error that has stopped the iteration
        """
        while self.advance():
            yield self.row

        if self._err is not None:
            raise self._err

    def fetchall(self) -> list:
        """ Fetch all remaining rows into a list """
        return list(self)

    def mappings(self) -> abc.Iterator[SARowDict]:
        """ Iterate over the remaining rows as dicts

        Only works with SqlAlchemy rows.
        """
        # We use `._mapping` to convert a `Row` into a dict
        for row in self:
            yield dict(row._mapping)

    # Context manager

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        # No error in the body? Release errors are reported as usual
        if exc[0] is None:
            self.close()
            return False

        # Don't hide the original error
        try:
            self.close()
        except Exception:
            logger.warning('Failed to release a page while handling another error', exc_info=True)
        return False

    def __repr__(self):
        return f'{type(self).__name__}(limit={self.params.limit}, offset={self.params.offset}, count={self.count}, err={self._err!r})'

    # Page transitions

    def _read_row(self) -> bool:
        """ Read one row from the current page """
        assert self.page is not None

        try:
            row = self.page.fetchone()
        except Exception as e:
            self._fail(e, 'Failed to read a row')
            return False

        if row is None:
            return False

        self.row = row
        self.count += 1
        return True

    def _next_page(self) -> bool:
        """ Release the current page and load the next one, if there is one """
        # Release the page. It must be done before the next page is requested.
        page, self.page = self.page, None
        try:
            page.close()  # type: ignore[union-attr]
        except Exception as e:
            self._fail(e, 'Failed to release a page')
            return False

        # A short page is the last page
        if self._is_last_page():
            logger.debug('Last page: %d rows at offset=%d', self.count, self.params.offset)
            return False

        # Next page
        self.count = 0
        self.params = self.params.next_page()
        if not self._fetch_page():
            return False

        return self._read_row()

    def _fetch_page(self) -> bool:
        """ Invoke the query callback with the current page descriptor """
        logger.debug('Fetching a page: limit=%d offset=%d', self.params.limit, self.params.offset)
        self.pages_fetched += 1

        try:
            self.page = self.query(self.params)
        except Exception as e:
            self._fail(e, 'Failed to fetch a page')
            return False

        return True

    def _is_last_page(self) -> bool:
        """ Is the current page the last one? Yes, if it has fewer rows than requested """
        return self.count < self.params.limit

    def _fail(self, e: Exception, message: str):
        """ Remember the error. It stops the iteration for good. """
        logger.debug('%s: limit=%d offset=%d: %r', message, self.params.limit, self.params.offset, e)
        self._err = e
