"""jlscaffold -- generate Julia package repositories from a template.

Quick usage::

    from jlscaffold import TemplateConfig, generate
    from jlscaffold.plugins import CodeCov, TravisCI

    config = TemplateConfig(
        user="alice",
        julia_version="1.1.0",
        authors="Alice",
        plugins=[TravisCI(), CodeCov()],
    )
    generate("Foo", config)
"""

from jlscaffold.config import TemplateConfig
from jlscaffold.generate import PathExistsError, generate

__version__ = "0.1.0"

__all__ = [
    "PathExistsError",
    "TemplateConfig",
    "generate",
]
