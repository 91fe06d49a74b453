import re
from typing import Any, Mapping

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(.*?)\s*\}\}")


def render(template: str, values: Mapping[str, Any]) -> str:
    """Replace ``{{ name }}`` placeholders; unknown names become ``undefined``."""

    def _sub(m: "re.Match[str]") -> str:
        name = m.group(1)
        if name not in values:
            return "undefined"
        return str(values[name])

    return _PLACEHOLDER_RE.sub(_sub, template)
