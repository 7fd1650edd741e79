from typing import Any

from zonelink import run
from zonelink.base.logger import zl_logger


def handler(event: dict[str, Any], context: Any = None) -> list[dict[str, Any]]:
    """Scheduled entry point.

    ``event`` carries ``roleArn`` and ``region``. Returns the tagged zone
    catalog as plain dicts.
    """
    zl_logger.info("Invoked with %s", event, operation="handler")
    catalog = run(event)
    return [zone.model_dump(mode="json") for zone in catalog]
