from .core import SQLAExtractor  # noqa: F401
from .querying import QueryPage  # noqa: F401
