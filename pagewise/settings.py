from __future__ import annotations

import dataclasses
from typing import Optional


@dataclasses.dataclass
class PagerSettings:
    """ Settings for paged queries

    This object defines how large the pages are when the caller does not say so,
    and how large they are allowed to be
    """
    # The `limit` you get by default, if not specified
    default_limit: Optional[int] = 1000

    # The max number of rows in a page, regardless of the limit
    max_limit: Optional[int] = None

    def get_final_limit(self, limit: Optional[int]) -> Optional[int]:
        """ Fine-tune the page size by applying default and max limits

        Used by: `in_batches()` to decide how many rows every page is limited to.
        """
        # Apply default limit
        if not limit:
            limit = self.default_limit

        # Apply max limit
        if limit and self.max_limit:
            limit = min(limit, self.max_limit)

        # Done
        return limit


# Settings used when none are given
DEFAULT_SETTINGS = PagerSettings()
