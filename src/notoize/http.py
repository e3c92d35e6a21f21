"""HTTP helpers with cross-platform TLS guidance."""

from __future__ import annotations

from collections.abc import Mapping
import ssl
from typing import Any
import urllib.error
import urllib.request

import certifi

from notoize.exceptions import TLSCertificateError


USER_AGENT = "notoize (+https://notofonts.github.io)"


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def _ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


def _is_cert_error(error: urllib.error.URLError) -> bool:
    reason = getattr(error, "reason", None)
    return isinstance(reason, ssl.SSLCertVerificationError)


def open_url(
    url: str | urllib.request.Request,
    *,
    headers: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> Any:
    """Open a URL with a certifi SSL context and cert guidance on failure."""
    request = url
    if isinstance(url, str):
        merged = {"User-Agent": USER_AGENT, **dict(headers or {})}
        request = urllib.request.Request(url, headers=merged)
    try:
        return urllib.request.urlopen(request, timeout=timeout, context=_ssl_context())
    except urllib.error.URLError as exc:
        if _is_cert_error(exc):
            raise TLSCertificateError(_tls_help(str(getattr(request, "full_url", url)))) from exc
        raise


def fetch_bytes(url: str, *, timeout: float | None = 30.0) -> bytes:
    """Return the body of ``url``."""
    with open_url(url, timeout=timeout) as response:
        return response.read()


__all__ = ["USER_AGENT", "fetch_bytes", "open_url"]
