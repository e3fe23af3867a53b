"""Resolve ``pkg.mod:attr`` references to Python objects.

Canonical format is::

    "pkg.mod:attr"

Dot shorthand (``pkg.mod.attr``) is accepted and split on the last dot. Dotted
attribute paths are allowed in colon form, e.g. ``pkg.mod:Cards.title``.
"""

from __future__ import annotations

import importlib
from typing import NewType

ObjectRef = NewType("ObjectRef", str)


def _is_valid_module(module: str) -> bool:
    if not module or module.strip() != module:
        return False
    parts = module.split(".")
    return all(p and p.isidentifier() for p in parts)


def _is_valid_attr_path(attr: str) -> bool:
    if not attr or attr.strip() != attr:
        return False
    return all(p.isidentifier() for p in attr.split("."))


def normalize_ref(s: str) -> ObjectRef:
    """Normalize a reference to canonical ``module:attr`` form.

    Raise ``ValueError`` for obviously invalid inputs.
    """

    if not isinstance(s, str):
        raise TypeError("object ref must be a str")

    raw = s.strip()
    if not raw:
        raise ValueError("object ref must be non-empty")

    if ":" in raw:
        if raw.count(":") != 1:
            raise ValueError("object ref must contain at most one ':'")
        module, attr = raw.split(":", 1)
    else:
        if "." not in raw:
            raise ValueError("dot shorthand object ref must contain at least one '.'")
        module, attr = raw.rsplit(".", 1)

    if not _is_valid_module(module) or not _is_valid_attr_path(attr):
        raise ValueError(f"invalid object ref: {raw!r}")
    return ObjectRef(f"{module}:{attr}")


def resolve_ref(s: str) -> object:
    """Import the module named by ``s`` and return the referenced attribute.

    Raises ``ImportError`` if the module cannot be imported and
    ``AttributeError`` if the attribute path does not exist.
    """

    module_name, attr = normalize_ref(s).split(":", 1)
    obj: object = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj
