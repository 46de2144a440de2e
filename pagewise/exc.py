class BasePagewiseException(Exception):
    pass


class InvalidLimitError(BasePagewiseException, ValueError):
    """ Invalid page size provided

    Reported when the `limit` is not a positive integer: such a cursor would never see a short page,
    and would request the same page over and over again.
    """

    def __init__(self, limit: object):
        self.limit = limit

        super().__init__(f'Page limit must be a positive integer, got {limit!r}')


class UnorderedStatementWarning(UserWarning):
    """ A statement is paginated without ORDER BY

    Reported when a SELECT statement has no ORDER BY clause: pages of such a query are not guaranteed
    to be consistent with one another. Rows may be skipped, or returned twice.
    """
