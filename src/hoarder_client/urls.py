"""Server address normalization."""

import logging

import httpx

from .errors import UrlError

logger = logging.getLogger("hoarder_client.urls")

DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(raw_url: str) -> str:
    """Reduce a user-supplied address to its origin: ``scheme://host[:port]``.

    Path, query, fragment and userinfo are dropped. The host is lowercased
    and IDNA-encoded, default ports are omitted, and there is never a
    trailing slash, so normalizing an origin returns it unchanged.
    """
    logger.info("Normalizing URL: %s", raw_url)
    try:
        url = httpx.URL(raw_url.strip())
        host = url.raw_host.decode("ascii")
    except (httpx.InvalidURL, UnicodeError, TypeError) as e:
        logger.error("URL parsing error: %s", e)
        raise UrlError(str(e)) from e

    scheme = url.scheme.lower()
    if not scheme:
        logger.error("URL parsing error: no scheme in %r", raw_url)
        raise UrlError("relative URL without a base")
    if scheme not in DEFAULT_PORTS:
        logger.error("URL parsing error: unsupported scheme %r", scheme)
        raise UrlError(f"unsupported scheme '{scheme}'")
    if not host:
        logger.error("URL parsing error: no host in %r", raw_url)
        raise UrlError("empty host")

    # IPv6 literals come back without their brackets
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"

    origin = f"{scheme}://{host.lower()}"
    # httpx only folds default ports for lowercase schemes
    if url.port is not None and url.port != DEFAULT_PORTS[scheme]:
        origin = f"{origin}:{url.port}"

    logger.info("Normalized URL: %s", origin)
    return origin
