"""
Rowgate Python SDK - Client library for the Rowgate gateway.

This SDK provides the frontend half of the pipeline:
- DataClient for fetching GET /data asynchronously
- Success / Failure results for a single fetch
- RecordsView, a rendering layer that owns the displayed records

Example:
    >>> from sdk.rowgate_sdk import DataClient, RecordsView
    >>>
    >>> async with DataClient("http://localhost:8081/data") as client:
    ...     view = RecordsView(client)
    ...     view.mount()
    ...     await view.settled()

Invariants:
    - A fetch never raises; it resolves to Success or Failure
    - Records keep the order the gateway returned them in

Version: 0.1.0
"""

__version__ = "0.1.0"

from .client import DataClient, decode_records
from .config import ClientSettings
from .errors import RowgateError, TransportError
from .render import format_table, render_table
from .result import Failure, FetchResult, Record, Success
from .view import RecordsView

__all__ = [
    # Version
    "__version__",
    # Client
    "DataClient",
    "decode_records",
    "ClientSettings",
    # Results
    "Record",
    "Success",
    "Failure",
    "FetchResult",
    # Rendering
    "RecordsView",
    "format_table",
    "render_table",
    # Errors
    "RowgateError",
    "TransportError",
]
