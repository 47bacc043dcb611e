import json
import logging
import requests
from typing import Dict, Any, Optional

log = logging.getLogger(__name__)


def fetch_local_status(host: str, port: str, timeout: float = 2) -> Optional[Dict[str, Any]]:
    """
    Asks a running sidecar for its self-reported status.

    This is a one-shot diagnostic probe for the console; the supervisor never
    waits on it.

    :param host: The host the sidecar listens on.
    :param port: The sidecar port.
    :param timeout: Request timeout in seconds.
    :return: The decoded status payload, or None if the sidecar did not answer.
    """
    url = f"http://{host}:{port}/api/local-status"
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        log.debug(f"Local API did not answer at '{url}': {e}")
        return None
    except json.JSONDecodeError as e:
        log.error(f"Failed to decode local API status from '{url}': {e}")
        return None
