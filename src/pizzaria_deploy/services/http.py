"""HTTP liveness probing."""

import logging

import requests

logger = logging.getLogger(__name__)


def probe(url: str, timeout: float = 5) -> bool:
    """Return True if GET url answers with a non-error status.

    Connection errors and timeouts count as "not responding"; they are
    never raised.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.debug("Probe %s failed: %s", url, e)
        return False
    return response.status_code < 400
