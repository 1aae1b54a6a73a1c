"""Ledger error taxonomy.

The four user-facing kinds derive from ``LedgerError`` and are returned to the
caller with no state change. ``InternalInvariantViolation`` deliberately sits
outside that hierarchy: it reports a defect in the engine, not a bad request.
"""


class LedgerError(Exception):
    """Base user-facing error with a stable code and HTTP status."""

    code = 'ledger_error'

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidArgument(LedgerError):
    """Malformed caller input (400)."""

    code = 'invalid_argument'

    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFound(LedgerError):
    """Reference to a train or booking that does not exist (404)."""

    code = 'not_found'

    def __init__(self, message: str):
        super().__init__(message, 404)


class ResourceExhausted(LedgerError):
    """Train has no available seats (409)."""

    code = 'resource_exhausted'

    def __init__(self, message: str = 'no available seats'):
        super().__init__(message, 409)


class AlreadyExists(LedgerError):
    """Passenger already holds a booking on the train (409)."""

    code = 'already_exists'

    def __init__(self, message: str = 'duplicate booking'):
        super().__init__(message, 409)


class InternalInvariantViolation(Exception):
    """A self-check that correct engine logic can never trip has fired."""

    code = 'internal_invariant_violation'
    status_code = 500

    def __init__(self, invariant: str, **context):
        self.invariant = invariant
        self.context = context
        self.message = f'internal invariant violated: {invariant}'
        super().__init__(self.message)
