"""Exception hierarchy for the font stack resolver."""

from __future__ import annotations


class NotoizeError(RuntimeError):
    """Base exception for resolution failures."""


class CatalogDataError(NotoizeError):
    """Raised when the packaged variant table is inconsistent."""


class UnknownVariantError(NotoizeError):
    """Raised when catalog data references a variant the classifier does not know."""

    def __init__(self, variant: str, *, block_id: int | None = None) -> None:
        self.variant = variant
        self.block_id = block_id
        location = f" (block {block_id})" if block_id is not None else ""
        super().__init__(f"Unknown font variant '{variant}'{location}.")


class BlockIndexError(NotoizeError):
    """Raised when block descriptors are unsorted or overlap."""


class DataSourceError(NotoizeError):
    """Raised when a block index or block support document cannot be retrieved."""


class TLSCertificateError(DataSourceError):
    """Raised when TLS certificate verification fails during downloads."""


class ConfigurationError(NotoizeError):
    """Raised when a style configuration payload cannot be parsed."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BlockIndexError",
    "CatalogDataError",
    "ConfigurationError",
    "DataSourceError",
    "NotoizeError",
    "TLSCertificateError",
    "UnknownVariantError",
    "exception_hint",
    "exception_messages",
]
