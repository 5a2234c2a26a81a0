"""${name} placeholder substitution for alert messages and the MOTD."""

from __future__ import annotations

import re
from collections.abc import Mapping

_PLACEHOLDER = re.compile(r"\$\{([^{}]+)\}")


def placeholder(name: str) -> str:
    return "${" + name + "}"


def render(template: str, variables: Mapping[str, str]) -> str:
    """Replace every ``${name}`` whose name is in *variables*.

    Single pass: substituted values are inserted literally and never
    re-scanned. Unknown placeholders are left as they are.
    """

    def replacer(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return _PLACEHOLDER.sub(replacer, template)
