""" SqlAlchemy integration: load the results of a SELECT statement in pages """

from __future__ import annotations

import warnings
from typing import Optional, Union

import sqlalchemy as sa
import sqlalchemy.orm

from . import exc
from .params import PageParams
from .rows import PagedRows
from .settings import PagerSettings, DEFAULT_SETTINGS
from .typing import QueryCallback


# Anything that can execute a statement
Executor = Union[sa.engine.Connection, sa.orm.Session]


def in_batches(connection: Executor, stmt: sa.sql.Select, limit: Optional[int] = None, *, settings: PagerSettings = None) -> PagedRows:
    """ Execute a SELECT statement in pages of `limit` rows

    Example:
        stmt = sa.select(User).order_by(User.id)

        with in_batches(connection, stmt, 1000) as rows:
            for row in rows:
                ...

    Args:
        connection: The connection (or ORM session) to execute the statement with
        stmt: The statement to execute. Has to be ordered, by a unique key, so that pages are consistent.
        limit: Page size. Default: `settings.default_limit`
        settings: Page size settings

    Raises:
        exc.InvalidLimitError: no usable page size
        sa.exc.DBAPIError: the first page has failed
    """
    settings = settings or DEFAULT_SETTINGS
    limit = settings.get_final_limit(limit)

    warn_if_unordered(stmt, stacklevel=3)
    return PagedRows.of(limit, _execute_pages(connection, stmt))  # type: ignore[arg-type]


def statement_query(connection: Executor, stmt: sa.sql.Select) -> QueryCallback:
    """ Make a query callback that executes `stmt` one page at a time

    Warns:
        exc.UnorderedStatementWarning: the statement has no ORDER BY
    """
    warn_if_unordered(stmt, stacklevel=3)
    return _execute_pages(connection, stmt)


def _execute_pages(connection: Executor, stmt: sa.sql.Select) -> QueryCallback:
    def query(params: PageParams) -> sa.engine.Result:
        return connection.execute(paginate_statement(stmt, params))

    return query


def paginate_statement(stmt: sa.sql.Select, params: PageParams) -> sa.sql.Select:
    """ Modify the SQL Select statement: only select rows of the given page

    If the statement has its own OFFSET and LIMIT, pages are taken from within that window:
    the page offset is added to the statement's OFFSET, and the last page is cut at the statement's LIMIT.
    """
    # The statement's own window. Raises CompileError if it's not a plain integer.
    window_offset, window_limit = stmt._offset, stmt._limit

    # Cut the page at the end of the window
    limit = params.limit
    if window_limit is not None:
        limit = max(min(limit, window_limit - params.offset), 0)

    # Always replace the OFFSET: `None` resets it
    offset = (window_offset or 0) + params.offset
    stmt = stmt.offset(offset or None).limit(limit)

    # Done
    return stmt


def has_order_by(stmt: sa.sql.Select) -> bool:
    """ Check: does the statement have an ORDER BY clause? """
    return bool(stmt._order_by_clauses)


def warn_if_unordered(stmt: sa.sql.Select, *, stacklevel: int = 2):
    """ Warn when the statement has no ORDER BY

    Args:
        stacklevel: The frame to report, counting from the caller of this function
    """
    if not has_order_by(stmt):
        warnings.warn(
            'Paginating a SELECT statement without ORDER BY: pages may skip or repeat rows. '
            'Order it by a unique key.',
            exc.UnorderedStatementWarning,
            stacklevel=stacklevel,
        )
