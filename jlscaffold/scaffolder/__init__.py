"""jlscaffold scaffolder -- the file-level building blocks of a generated package.

Quick usage::

    from jlscaffold.scaffolder import JuliaVersion, gen_file, render, version_floor

    text = render("julia {{FLOOR}}", {"FLOOR": version_floor(JuliaVersion.parse("1.1.0"))})
    gen_file("/tmp/Foo/REQUIRE", text)
"""

from jlscaffold.scaffolder.files import gen_file
from jlscaffold.scaffolder.templates import TemplateRenderError, render, substitute
from jlscaffold.scaffolder.versions import JuliaVersion, version_floor

__all__ = [
    "JuliaVersion",
    "TemplateRenderError",
    "gen_file",
    "render",
    "substitute",
    "version_floor",
]
