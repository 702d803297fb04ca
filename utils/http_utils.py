"""
HTTP Utility module for market-data API requests.
GET with retries, exponential backoff and Retry-After support.
"""

import time
import requests
from typing import Optional, Dict, Any, Union
from utils.logger import setup_logger

logger = setup_logger('http_utils')

# Rate limits and server errors are worth retrying
TRANSIENT_STATUSES = {429, 500, 502, 503, 504}
# Bad or under-privileged key, or unknown ticker: retrying will not help
TERMINAL_STATUSES = {
    401: "key rejected",
    402: "endpoint not on current plan",
    403: "key rejected or endpoint not on current plan",
    404: "not found",
}
MAX_RETRY_AFTER_SECONDS = 60.0


def _retry_delay(response: Optional[requests.Response], attempt: int, base_delay: float) -> float:
    """Honor a numeric Retry-After header, else back off exponentially."""
    if response is not None:
        retry_after = response.headers.get('Retry-After')
        if retry_after and retry_after.isdigit():
            return min(float(retry_after), MAX_RETRY_AFTER_SECONDS)
    return base_delay * (2 ** (attempt - 1))


def make_request(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: int = 10,
    retries: int = 3,
    retry_delay: float = 1.0,
    source_name: str = "API"
) -> Optional[Union[Dict, list]]:
    """
    Make an HTTP GET request with retries and error handling.

    Never raises: every failure is logged and reported as None, which the
    providers pass on as "unavailable".

    Args:
        url: The full URL to request.
        params: Query parameters dictionary.
        headers: Request headers dictionary.
        timeout: Request timeout in seconds.
        retries: Number of retry attempts for transient errors.
        retry_delay: Base delay in seconds between retries.
        source_name: Name of the data source for logging.

    Returns:
        Parsed JSON response if successful, None otherwise.
    """
    for attempt in range(retries + 1):
        response = None
        try:
            response = requests.get(url, params=params, headers=headers, timeout=timeout)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status in TERMINAL_STATUSES:
                logger.warning(f"{source_name} HTTP {status}: {TERMINAL_STATUSES[status]}")
                return None
            if status not in TRANSIENT_STATUSES:
                logger.error(f"{source_name} HTTP error: {e}")
                return None
            logger.warning(f"{source_name} HTTP {status}. Retrying ({attempt + 1}/{retries})...")

        except ValueError as e:
            logger.error(f"{source_name} JSON parsing error: {e}")
            return None

        except requests.exceptions.RequestException as e:
            logger.warning(f"{source_name} connection error: {e}. Retrying ({attempt + 1}/{retries})...")

        if attempt < retries:
            time.sleep(_retry_delay(response, attempt + 1, retry_delay))

    logger.error(f"{source_name} request failed after {retries} retries")
    return None
