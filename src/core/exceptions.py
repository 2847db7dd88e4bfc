"""
QueryGate Custom Exceptions
"""


class QueryGateError(Exception):
    """Base exception for all QueryGate errors"""

    pass


class ConfigurationError(QueryGateError):
    """Configuration errors"""

    pass


class QueryRejectedError(QueryGateError):
    """Raised by require_admitted when the gate turns a query away"""

    def __init__(self, rejection):
        self.rejection = rejection
        super().__init__(rejection.message)

    @property
    def kind(self):
        return self.rejection.kind
