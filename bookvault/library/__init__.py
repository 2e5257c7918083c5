"""Book library core: validation, search, storage, querying and statistics."""

from bookvault.library.query import run_query
from bookvault.library.search import highlight, matches
from bookvault.library.stats import compute_stats
from bookvault.library.store import BookStore
from bookvault.library.validators import validate_all, validate_field
from bookvault.library.vault import BookVault

__all__ = [
    "BookStore",
    "BookVault",
    "compute_stats",
    "highlight",
    "matches",
    "run_query",
    "validate_all",
    "validate_field",
]
