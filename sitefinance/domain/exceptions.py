"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProcurementAPIError(DomainException):
    """Procurement service returned an error or is unavailable"""

    pass


class ProjectNotFoundError(DomainException):
    """No project with the requested id"""

    pass


class ContractNotFoundError(DomainException):
    """No contract with the requested id"""

    pass


class InvalidTransitionError(DomainException):
    """Lifecycle policy rejected a project status change"""

    pass


class InvalidNoteError(DomainException):
    """Operational note has no content"""

    pass


class InvalidDocumentLinkError(DomainException):
    """Saved link has no name or no url"""

    pass
