"""Globally unique identifiers for generated build-definition elements.

Every element contributed for an installation is namespaced by the
installation path, so two toolchains never clash inside the host registry::

    >>> identifier("/opt/br/output", "toolchain.base")
    'org.buildroot.opt.br.output.toolchain.base'
"""

from __future__ import annotations

import os

ID_NAMESPACE = "org.buildroot"

TOOLCHAIN_BASE_SUFFIX = "toolchain.base"
AUTOTOOLS_TOOLCHAIN_BASE_SUFFIX = "autotools.toolchain.base"

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


def normalize_path(path: str) -> str:
    """Turn a filesystem path into a dotted id segment.

    Every separator becomes ``.``, then exactly one leading and one trailing
    ``.`` are removed.
    """
    dotted = "".join("." if ch in _SEPARATORS else ch for ch in path)
    if dotted.endswith("."):
        dotted = dotted[:-1]
    if dotted.startswith("."):
        dotted = dotted[1:]
    return dotted


def identifier(path: str, suffix: str) -> str:
    """Build the id of an element contributed for the installation at ``path``."""
    return f"{ID_NAMESPACE}.{normalize_path(path)}.{suffix}"


def toolchain_base_id(path: str) -> str:
    return identifier(path, TOOLCHAIN_BASE_SUFFIX)


def autotools_toolchain_base_id(path: str) -> str:
    return identifier(path, AUTOTOOLS_TOOLCHAIN_BASE_SUFFIX)


def tool_name(architecture: str, path: str, description: str | None = None) -> str:
    """Human-readable name shared by display labels and debugger keys.

    ``tool_name("ARM", "/opt/br")`` gives ``"Buildroot ARM - /opt/br"``; with a
    description it gives ``"Buildroot ARM C Compiler - /opt/br"``.
    """
    words = ["Buildroot", architecture]
    if description:
        words.append(description)
    return f"{' '.join(words)} - {path}"
