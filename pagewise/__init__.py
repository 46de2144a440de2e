__version__ = __import__('importlib.metadata').metadata.version('pagewise')

from .params import PageParams
from .rows import PagedRows
from .settings import PagerSettings
from .statement import in_batches, statement_query, paginate_statement

from . import exc
