__version__ = "0.1.0"

from .lookup import lookup, lookup_result
from .normalize import normalize_name
from .result import LookupResult, LookupStatus

__all__ = [
    "__version__",
    "LookupResult",
    "LookupStatus",
    "lookup",
    "lookup_result",
    "normalize_name",
]
