"""
Custom exceptions for the nym-exporter library
"""

from typing import Any, List, Optional


class NymExporterException(Exception):
    """Base exception for nym-exporter library"""
    pass


class FetchFailure(NymExporterException):
    """Transport or HTTP-level failure reaching the explorer"""

    def __init__(self, resource: str, message: str, status_code: Optional[int] = None):
        self.resource = resource
        self.status_code = status_code
        super().__init__(f"Fetch failed for {resource}: {message}")


class SchemaViolation(NymExporterException):
    """Explorer document does not match the expected schema"""

    def __init__(self, entity: str, identifier: Any, errors: List[dict]):
        self.entity = entity
        self.identifier = identifier
        self.errors = errors
        summary = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
            for error in errors[:5]
        )
        if len(errors) > 5:
            summary += f" (+{len(errors) - 5} more)"
        super().__init__(f"Invalid {entity} document for {identifier}: {summary}")


class PartialResolutionFailure(NymExporterException):
    """A node referenced by an account could not be resolved"""

    def __init__(self, address: str, node_id: int, cause: Exception):
        self.address = address
        self.node_id = node_id
        self.cause = cause
        super().__init__(f"Could not resolve node {node_id} for account {address}: {cause}")


class InvalidIdentifierError(NymExporterException):
    """Node ID or account address rejected before fetching"""
    pass


class ConfigurationError(NymExporterException):
    """Invalid configuration value"""
    pass
