"""Place encoded parameters in a request built with :py:mod:`requests`."""

from typing import Any, Dict, Mapping, Optional

import requests

from .encode import FormEncoder, encode

CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

# Methods whose parameters go in the URL when no destination is given.
QUERY_METHODS = ("GET", "HEAD", "DELETE")

DESTINATIONS = ("auto", "query", "body")


def prepare(
    method: str,
    url: str,
    params: Mapping[str, Any],
    destination: str = "auto",
    headers: Optional[Dict[str, str]] = None,
    encoder: Optional[FormEncoder] = None,
) -> requests.PreparedRequest:
    """Build a request carrying the encoded parameters. Nothing is sent.

    :param method: HTTP method name
    :type method: str
    :param url: full URL, which may already contain a query
    :type url: str
    :param params: parameters to encode
    :type params: dict
    :param destination: (optional) ``"query"``, ``"body"`` or ``"auto"``,
                        which picks the query for GET, HEAD and DELETE
    :type destination: str
    :param headers: (optional) extra request headers
    :type headers: dict
    :param encoder: (optional) encoder to use instead of the default one
    :type encoder: FormEncoder
    :returns: :py:class:`requests.PreparedRequest`
    :raises: `ValueError`: if the destination is unknown

    """
    if destination not in DESTINATIONS:
        raise ValueError(
            f"Unknown destination {destination!r}, expected one of "
            + ", ".join(DESTINATIONS)
        )
    headers = {} if headers is None else dict(headers)

    method = method.upper()
    if destination == "auto":
        destination = "query" if method in QUERY_METHODS else "body"

    encoded = encode(params) if encoder is None else encoder.encode(params)
    if destination == "query":
        return requests.Request(
            method, append_query(url, encoded), headers=headers
        ).prepare()

    req = requests.Request(
        method, url, data=encoded.encode("utf8"), headers=headers
    )
    if not any(key.lower() == "content-type" for key in req.headers):
        req.headers["Content-Type"] = CONTENT_TYPE
    return req.prepare()


def append_query(url: str, encoded: str) -> str:
    """
    Add an encoded query to a URL, after any query it already has.
    """
    if not encoded:
        return url
    url, hashmark, fragment = url.partition("#")
    if "?" not in url:
        url += "?"
    elif not url.endswith(("?", "&")):
        url += "&"
    return url + encoded + hashmark + fragment
