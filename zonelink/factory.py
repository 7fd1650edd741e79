"""Service factory.

Provides :func:`service_factory`, the single entry-point for creating
AWS service clients. ``@overload`` signatures give each service name
its blueprint type so IDEs can autocomplete methods.
"""

from typing import overload, Literal, Any

from zonelink.base import (
    DNSBlueprint,
    NetworkBlueprint,
    CredentialBrokerBlueprint,
    existing_services,
)
from zonelink.base.config import AWSConfig
from zonelink.aws.factory import SERVICE_REGISTRY


@overload
def service_factory(service_name: Literal["dns"], config: AWSConfig | dict) -> DNSBlueprint: ...


@overload
def service_factory(service_name: Literal["network"], config: AWSConfig | dict) -> NetworkBlueprint: ...


@overload
def service_factory(
    service_name: Literal["iam"], config: AWSConfig | dict
) -> CredentialBrokerBlueprint: ...


def service_factory(service_name: existing_services, config: AWSConfig | dict) -> Any:
    """
    Create a service instance by name.
    Args:
        service_name: The name of the service ('dns', 'network' or 'iam').
        config: An :class:`AWSConfig` or a raw dict validated into one.
    Returns:
        An instance of the requested service class.
    Raises:
        ValueError: If the service is not supported.
        pydantic.ValidationError: If a raw config dict is invalid.
    """
    if service_name not in SERVICE_REGISTRY:
        raise ValueError(f"Unsupported service '{service_name}'")

    service_class = SERVICE_REGISTRY[service_name]
    config_obj = config if isinstance(config, AWSConfig) else AWSConfig(**config)
    return service_class(config_obj)
