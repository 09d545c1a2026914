"""Fatal depreciation errors.

Non-fatal conditions (missing usage data, book value mismatch) are reported
as `Notice` values on the result, not raised.
"""


class DepreciationError(ValueError):
    """Base class for depreciation engine errors."""


class InvalidInput(DepreciationError):
    """Asset parameters rejected before any computation."""
