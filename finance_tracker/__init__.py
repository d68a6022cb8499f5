"""Top‑level package for the finance tracker summary engine.

The engine turns an in-memory snapshot of one user's data into the
figures a dashboard shows.  The primary modules are:

* ``models`` – immutable input records and output value objects
* ``summary`` – balances, fixed-expense totals and budget headroom
* ``timeseries`` – the fixed-length monthly income/expense series
* ``categories`` – the trailing-window top-K expense categories
* ``recurring`` – recurring expense listing and due-date ordering
* ``transactions`` – filtering, sorting and the recent-transactions list
* ``dashboard`` – runs all of the above over one snapshot
* ``loaders`` – builds validated snapshots from rows, DataFrames or JSON
* ``validation`` – ``ValidationError`` and the fail-fast input checks
* ``config`` – default window sizes and result limits
"""

from . import categories  # noqa: F401  # re-exported for convenience
from . import dashboard  # noqa: F401  # re-exported for convenience
from . import loaders  # noqa: F401  # re-exported for convenience
from . import models  # noqa: F401  # re-exported for convenience
from . import recurring  # noqa: F401  # re-exported for convenience
from . import summary  # noqa: F401  # re-exported for convenience
from . import timeseries  # noqa: F401  # re-exported for convenience
from . import transactions  # noqa: F401  # re-exported for convenience
from .validation import ValidationError  # noqa: F401


__all__ = [
    "categories",
    "dashboard",
    "loaders",
    "models",
    "recurring",
    "summary",
    "timeseries",
    "transactions",
    "ValidationError",
]
