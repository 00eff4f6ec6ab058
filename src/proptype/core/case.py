"""Case conversion helpers (snake_case <-> UpperCamelCase)."""

import re

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str | None) -> str | None:
    """selfLink -> self_link, IPAddress -> ip_address"""
    if name is None:
        return None
    result = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    result = _LOWER_UPPER.sub(r"\1_\2", result)
    return result.replace("-", "_").lower()


def camelize(name: str) -> str:
    """self_link -> SelfLink, selfLink -> SelfLink"""
    parts = re.split(r"[_\-\s]+", name)
    return "".join(p[:1].upper() + p[1:] for p in parts if p)
