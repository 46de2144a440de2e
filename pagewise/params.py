from __future__ import annotations

from typing import NamedTuple


class PageParams(NamedTuple):
    """ Page descriptor: which page of the result set to fetch """
    # Page size: the max number of rows in a page
    limit: int

    # The number of rows to skip
    offset: int = 0

    def next_page(self) -> PageParams:
        """ Get the descriptor of the page that follows this one """
        return self._replace(offset=self.offset + self.limit)
