"""
Zonelink exception hierarchy.

Every collaborator has a top-level error that inherits from
:class:`ZonelinkError` and sub-exceptions for the provider error codes
the reconciler is likely to meet.
"""


# ── Base ──────────────────────────────────────────────────────────────
class ZonelinkError(Exception):
    """Root exception for all zonelink errors."""


# ── DNS (Route 53) ────────────────────────────────────────────────────
class DNSError(ZonelinkError):
    """Base exception for hosted zone operations."""


class ZoneNotFoundError(DNSError):
    """Hosted zone not found."""


class VpcNotFoundError(DNSError):
    """VPC id or region rejected by the DNS service."""


class AssociationConflictError(DNSError):
    """Another zone with the same domain is already associated with the VPC."""


class AssociationNotFoundError(DNSError):
    """VPC association or association authorization does not exist."""


class LastAssociationError(DNSError):
    """The VPC is the last one associated with a private zone."""


class NotAuthorizedError(DNSError):
    """The caller may not associate or modify this zone."""


class AuthorizationLimitError(DNSError):
    """Too many outstanding VPC association authorizations for the zone."""


# ── Network (EC2) ─────────────────────────────────────────────────────
class NetworkError(ZonelinkError):
    """Base exception for VPC discovery."""


# ── Credentials (STS) ─────────────────────────────────────────────────
class CredentialError(ZonelinkError):
    """Base exception for role assumption."""


class RoleAccessDeniedError(CredentialError):
    """The caller is not allowed to assume the role."""


# ── Reconciliation ────────────────────────────────────────────────────
class MalformedFilterError(ZonelinkError):
    """A VPC's reconciliation tag is missing or is not a filter list."""


class AssociationStepError(ZonelinkError):
    """One step of the authorize/associate/revoke sequence failed."""

    def __init__(self, step: str, zone_id: str, vpc_id: str, message: str) -> None:
        super().__init__(message)
        self.step = step
        self.zone_id = zone_id
        self.vpc_id = vpc_id
