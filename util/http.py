"""
util/http.py

Tiny HTTP helper for JSON GET.
- Timeout can be configured via HTTP_TIMEOUT env (unset: transport default)
- Raises requests.HTTPError for non-2xx statuses and ValueError for non-JSON bodies
- No retries: callers decide how to report failures
"""

import requests

from util.config import env_timeout


def get_json(url, params=None, headers=None, timeout=None):
    """HTTP GET and decode the JSON body."""
    if timeout is None:
        timeout = env_timeout()

    resp = requests.get(url, params=params, headers=headers, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
