"""Definition key and reference naming helpers."""

from __future__ import annotations

DEFINITIONS_PREFIX = "#/definitions/"

_PATH_ESCAPE = "~1"
_NAME_SEPARATOR = "~0"


def qualified_name(package_path: str, type_name: str) -> str:
    """Construct a JSONSchema-safe qualified name for a type.

    The result is ``<typeName>`` or ``<safePkgPath>~0<typeName>``, where
    ``<safePkgPath>`` is the package path with ``/`` replaced by ``~1``
    following JSON Pointer escapes.
    """
    if package_path:
        return package_path.replace("/", _PATH_ESCAPE) + _NAME_SEPARATOR + type_name
    return type_name


def split_qualified_name(key: str) -> tuple[str, str]:
    """Recover ``(package_path, type_name)`` from a key built by :func:`qualified_name`."""
    escaped_path, separator, type_name = key.rpartition(_NAME_SEPARATOR)
    if not separator:
        return "", key
    return escaped_path.replace(_PATH_ESCAPE, "/"), type_name


def definition_link(key: str, document_name: str | None = None) -> str:
    link = DEFINITIONS_PREFIX + key
    return f"{document_name}{link}" if document_name else link


def split_reference(ref: str) -> tuple[str, str] | None:
    """Split ``[<document>]#/definitions/<key>`` into ``(document, key)``.

    The document part is empty for same-document references. Returns
    ``None`` for references that do not point into ``definitions``.
    """
    document_name, marker, key = ref.partition(DEFINITIONS_PREFIX)
    if not marker or not key:
        return None
    return document_name, key


def referenced_type_name(ref: str) -> str:
    """Return the bare type name that a reference's trailing path segment names."""
    trailing = ref.rsplit("/", 1)[-1]
    return split_qualified_name(trailing)[1]
