"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFiscalYearError(DomainException):
    """Fiscal year label is not of the form YYYY-YYYY with consecutive years"""

    def __init__(self, label: object):
        self.label = label
        super().__init__(f"Invalid fiscal year format: {label!r}")


class InvalidOracleOutputError(DomainException):
    """Oracle answer is not valid JSON or does not match the record schema"""

    pass
