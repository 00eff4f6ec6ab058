"""Lineage: dotted path identifying where a property sits in its resource.

Only meant for diagnostics and for naming members of constraint groups
(conflicts, at_least_one_of, ...). Once nested objects are flattened the
path no longer describes the schema a generator presents, so it is not a
unique identity.
"""

from proptype.core.case import underscore


def lineage(node) -> str:
    """Return e.g. ``parent.meta.label.foo`` for ``foo``.

    Array items and Map values share the name of their container and are
    not a separate path segment: the children of ``disks``' item type have
    lineage ``disks.<child>``. Generators that expect the container's name
    repeated for the element (``disks.disks.<child>``) must add it
    themselves; constraint group paths are written in the short form.
    """
    parent = node.parent
    if parent is None:
        return underscore(node.name) or ""
    if node.is_element():
        return lineage(parent)
    return f"{lineage(parent)}.{underscore(node.name)}"


def segments(node) -> list[str]:
    """Lineage split into its snake_case parts"""
    path = lineage(node)
    return path.split(".") if path else []
