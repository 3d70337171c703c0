"""HTML rendering for the home, go-get metadata and redirect pages.

Templates are bundled with the package and rendered with Jinja2. Handlers load
a template before sending headers so that parse failures can still become a
500 response, then stream the rendered chunks.
"""

from collections.abc import Iterator
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any

import jinja2

from govanity.registry import VCS, Package
from govanity.types import URLPath

DOC_BASE_URL = "https://pkg.go.dev/"


class TemplateKind(StrEnum):
    """Bundled page templates."""

    HOME = "home.html"
    VANITY = "vanity.html"
    REDIRECT = "redirect.html"


@dataclass(frozen=True)
class HomeContext:
    """Values for the package listing page."""

    domain: str
    packages: tuple[Package, ...]
    count: int


@dataclass(frozen=True)
class VanityContext:
    """Values for the go-import/go-source metadata page."""

    domain: str
    path: URLPath
    repo: str
    vcs: VCS


@dataclass(frozen=True)
class RedirectContext:
    """Values for the documentation redirect page."""

    domain: str
    path: URLPath


RenderContext = HomeContext | VanityContext | RedirectContext

_CONTEXT_TYPES: dict[TemplateKind, type] = {
    TemplateKind.HOME: HomeContext,
    TemplateKind.VANITY: VanityContext,
    TemplateKind.REDIRECT: RedirectContext,
}


class TemplateRenderError(Exception):
    """A page template failed to load, parse or execute."""

    def __init__(self, kind: TemplateKind, message: str) -> None:
        super().__init__(f"template {kind.value}: {message}")
        self.kind = kind


def _template_vars(context: RenderContext) -> dict[str, Any]:
    # Shallow; templates read Package attributes directly
    return {f.name: getattr(context, f.name) for f in fields(context)}


class TemplateRenderer:
    """Renders the bundled page templates.

    Undefined variables are errors rather than empty strings, so a page is
    never emitted with a silently missing value.
    """

    def __init__(self, loader: jinja2.BaseLoader | None = None) -> None:
        """Initialize renderer.

        Args:
            loader: Template loader (default: templates bundled with govanity)
        """
        self._env = jinja2.Environment(
            loader=loader or jinja2.PackageLoader("govanity", "templates"),
            autoescape=jinja2.select_autoescape(["html"]),
            undefined=jinja2.StrictUndefined,
        )
        self._env.globals["doc_base_url"] = DOC_BASE_URL

    def load(self, kind: TemplateKind) -> jinja2.Template:
        """Load and parse a template.

        Raises:
            TemplateRenderError: If the template is missing or does not parse
        """
        try:
            return self._env.get_template(kind.value)
        except jinja2.TemplateError as e:
            raise TemplateRenderError(kind, str(e)) from e

    def render(self, kind: TemplateKind, context: RenderContext) -> str:
        """Render a template to a string.

        Args:
            kind: Template to render
            context: Values for the template; its type must match ``kind``

        Returns:
            Complete HTML document

        Raises:
            TemplateRenderError: If loading or rendering fails
        """
        template = self.load(kind)
        return "".join(self.generate(template, kind, context))

    def generate(
        self,
        template: jinja2.Template,
        kind: TemplateKind,
        context: RenderContext,
    ) -> Iterator[str]:
        """Render an already loaded template chunk by chunk.

        A context of the wrong type is rejected immediately. Errors raised
        while rendering are re-raised as TemplateRenderError from inside the
        iteration, after earlier chunks have been yielded.
        """
        expected = _CONTEXT_TYPES[kind]
        if not isinstance(context, expected):
            raise TemplateRenderError(
                kind, f"expected {expected.__name__}, got {type(context).__name__}"
            )
        return _chunks(template, kind, _template_vars(context))


def _chunks(
    template: jinja2.Template,
    kind: TemplateKind,
    values: dict[str, Any],
) -> Iterator[str]:
    try:
        yield from template.generate(values)
    except jinja2.TemplateError as e:
        raise TemplateRenderError(kind, str(e)) from e
