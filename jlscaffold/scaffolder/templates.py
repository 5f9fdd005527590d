"""Mustache-style placeholder substitution backed by Jinja2.

Templates use ``{{KEY}}`` placeholders and ``{{#KEY}}...{{/KEY}}``
conditional sections.  Each template is compiled once into a Jinja2 template
in which every literal chunk of the source is passed in as data, so literal
text (including braces and Jinja syntax) reaches the output untouched.

Conditional tags are never treated as "standalone" lines: when the opening
tag sits on its own line and the condition is false, that line's newline
stays in the output::

    A
    {{#B}}B{{/B}}
    C          -> "A\\n\\nC" when B is missing

Templates avoid the blank line by opening the section at the end of the
previous line::

    A{{#B}}
    B{{/B}}
    C          -> "A\\nC" (or "A\\nB\\nC" when B is true)

Keys missing from the view are false in sections and empty in placeholders.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, Template, TemplateSyntaxError, Undefined

from jlscaffold.constants import DOCUMENTER_KINDS, PluginKind

if TYPE_CHECKING:
    from jlscaffold.config import TemplateConfig


class TemplateRenderError(ValueError):
    """Raised when a template contains malformed placeholder or section syntax."""


# ---------------------------------------------------------------------------
# Tag syntax
# ---------------------------------------------------------------------------

_TAG_PATTERN = re.compile(
    r"\{\{\{\s*(?P<raw>[^{}]*?)\s*\}\}\}"
    r"|\{\{\s*(?P<sigil>[#^/!&]?)\s*(?P<key>.*?)\s*\}\}",
    re.DOTALL,
)
_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")


def _stringify(value: Any) -> str:
    """Placeholder output: ``true``/``false`` for booleans, empty for nothing."""
    if value is None or isinstance(value, Undefined):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


_ENV = Environment(
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=False,
    lstrip_blocks=False,
    finalize=_stringify,
)


@lru_cache(maxsize=256)
def _compile(template: str) -> tuple[Template, tuple[str, ...], tuple[str, ...]]:
    """Translate mustache text into a Jinja2 template.

    Returns the compiled template together with the literal chunks and the
    view keys it references by index.
    """
    source: list[str] = []
    literals: list[str] = []
    keys: list[str] = []
    open_sections: list[tuple[str, int]] = []

    def add_literal(text: str, offset: int) -> None:
        if not text:
            return
        if "{{" in text:
            tag_at = offset + text.index("{{")
            raise TemplateRenderError(f"Unclosed tag at offset {tag_at}")
        literals.append(text)
        source.append(f"{{{{ _text[{len(literals) - 1}] }}}}")

    def key_ref(key: str, tag: str, offset: int) -> str:
        if not _KEY_PATTERN.match(key):
            raise TemplateRenderError(f"Malformed tag {tag!r} at offset {offset}")
        keys.append(key)
        return f"_lookup(_keys[{len(keys) - 1}])"

    pos = 0
    for match in _TAG_PATTERN.finditer(template):
        add_literal(template[pos : match.start()], pos)
        pos = match.end()
        tag = match.group(0)
        offset = match.start()

        if match.group("raw") is not None:
            source.append(f"{{{{ {key_ref(match.group('raw'), tag, offset)} }}}}")
            continue

        sigil = match.group("sigil")
        key = match.group("key")
        if sigil == "!":
            continue
        if sigil in ("", "&"):
            source.append(f"{{{{ {key_ref(key, tag, offset)} }}}}")
        elif sigil == "#":
            source.append(f"{{% if {key_ref(key, tag, offset)} %}}")
            open_sections.append((key, offset))
        elif sigil == "^":
            source.append(f"{{% if not {key_ref(key, tag, offset)} %}}")
            open_sections.append((key, offset))
        else:
            if not open_sections or open_sections[-1][0] != key:
                raise TemplateRenderError(
                    f"Unbalanced section tag {tag!r} at offset {offset}"
                )
            open_sections.pop()
            source.append("{% endif %}")

    add_literal(template[pos:], pos)

    if open_sections:
        key, offset = open_sections[-1]
        raise TemplateRenderError(f"Unclosed section {key!r} opened at offset {offset}")

    try:
        compiled = _ENV.from_string("".join(source))
    except TemplateSyntaxError as exc:
        raise TemplateRenderError(f"Could not compile template: {exc}") from exc
    return compiled, tuple(literals), tuple(keys)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(template: str, view: Mapping[str, Any]) -> str:
    """Replace placeholders in *template* with values from *view*.

    *template* is not modified.  Sections render their body only when the
    key is present in *view* and truthy; a missing key is never an error.

    Raises:
        TemplateRenderError: If *template* has malformed tag syntax.
    """
    compiled, literals, keys = _compile(template)
    values = dict(view)

    # Plain key lookup: Jinja2 subscripts fall back to attributes, so a key
    # such as "items" would otherwise resolve to a dict method.
    def lookup(key: str) -> Any:
        if key in values:
            return values[key]
        return _ENV.undefined(name=key)

    return compiled.render(_text=literals, _keys=keys, _lookup=lookup)


def substitute(
    template: str,
    config: TemplateConfig,
    view: Mapping[str, Any] | None = None,
) -> str:
    """Render *template* with the default view derived from *config*.

    Default keys:

    * ``USER``: the remote account name.
    * ``VERSION``: ``"major.minor"`` of the Julia version (no prerelease
      marker, unlike :func:`~jlscaffold.scaffolder.versions.version_floor`).
    * ``DOCUMENTER``: a documentation plugin is configured.
    * ``CODECOV`` / ``COVERALLS``: the coverage plugin is configured.
    * ``AFTER``: any of the three above, i.e. CI needs an after-build step.

    Values in *view* win over the defaults.
    """
    v = config.julia_version
    plugins = config.plugins
    defaults: dict[str, Any] = {
        "USER": config.user,
        "VERSION": f"{v.major}.{v.minor}",
        "DOCUMENTER": any(kind in DOCUMENTER_KINDS for kind in plugins),
        "CODECOV": PluginKind.CODECOV in plugins,
        "COVERALLS": PluginKind.COVERALLS in plugins,
    }
    defaults["AFTER"] = defaults["DOCUMENTER"] or defaults["CODECOV"] or defaults["COVERALLS"]
    return render(template, {**defaults, **(view or {})})
