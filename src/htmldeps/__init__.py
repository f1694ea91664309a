"""Extract HTML resource dependencies, then reinsert them after a build step."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ContentDependencies",
    "CountMismatchError",
    "HtmlDepsConfig",
    "HtmlDepsLoader",
    "HtmlDepsError",
    "InlinedDependencies",
    "InlinedResource",
    "LinkedDependencies",
    "LinkedResource",
    "PlaceholderLookupError",
    "TemplateKvStorage",
    "__version__",
]

from .errors import ConfigurationError as ConfigurationError
from .errors import CountMismatchError as CountMismatchError
from .errors import HtmlDepsError as HtmlDepsError
from .errors import PlaceholderLookupError as PlaceholderLookupError
from .loader import ContentDependencies as ContentDependencies
from .loader import HtmlDepsLoader as HtmlDepsLoader
from .model.config import HtmlDepsConfig as HtmlDepsConfig
from .transform.template_kv import TemplateKvStorage as TemplateKvStorage
from .types import InlinedDependencies as InlinedDependencies
from .types import InlinedResource as InlinedResource
from .types import LinkedDependencies as LinkedDependencies
from .types import LinkedResource as LinkedResource
