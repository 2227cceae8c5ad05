"""Resolution of resource URIs into paths on the sidecar's local filesystem."""

from __future__ import annotations

from urllib.parse import unquote, urlparse

_LOCAL_AUTHORITIES = {"", "localhost"}


def to_local_path(uri: str) -> str:
    """Return the local filesystem path addressed by ``uri``.

    Any scheme is accepted (``file``, ``file-sidecar-<machine>``) since the
    scheme only routes the request to this sidecar. Bare absolute paths are
    passed through.
    """
    if not uri:
        raise ValueError("Resource URI must not be empty")

    if uri.startswith("/"):
        return uri

    parsed = urlparse(uri)
    if not parsed.scheme:
        raise ValueError(f"Resource is neither a URI nor an absolute path: {uri}")

    path = unquote(parsed.path)
    if parsed.netloc and parsed.netloc.lower() not in _LOCAL_AUTHORITIES:
        return f"//{parsed.netloc}{path}"
    if not path.startswith("/"):
        raise ValueError(f"URI does not address an absolute path: {uri}")
    return path


__all__ = ["to_local_path"]
