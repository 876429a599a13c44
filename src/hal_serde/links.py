"""
:py:mod:`hal_serde.links` builds :py:class:`Link` objects out of either named routes or
literal URLs.
"""
import re
import typing
import urllib.parse
from collections import OrderedDict

from .exceptions import LinkGenerationError
from .interfaces import RequestContext, UrlGenerator
from .models import Link

PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _query_value(v: typing.Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def build_query_string(query_params: typing.Mapping[str, typing.Any]) -> str:
    pairs: typing.List[typing.Tuple[str, str]] = []
    for k, v in query_params.items():
        if v is None:
            continue
        if isinstance(v, (list, tuple)):
            pairs.extend((k, _query_value(x)) for x in v)
        else:
            pairs.append((k, _query_value(v)))
    return urllib.parse.urlencode(pairs)


def merge_query_string(url: str, query_params: typing.Mapping[str, typing.Any]) -> str:
    """
    Merges ``query_params`` into the query string of ``url``; arguments in ``query_params``
    replace those of the same name already present.  The fragment is preserved.
    """
    parsed = urllib.parse.urlsplit(url)
    merged: "OrderedDict[str, typing.Any]" = OrderedDict()
    for k, v in urllib.parse.parse_qsl(parsed.query, keep_blank_values=True):
        prev = merged.get(k)
        if prev is None:
            merged[k] = v
        elif isinstance(prev, list):
            prev.append(v)
        else:
            merged[k] = [prev, v]
    merged.update(query_params)
    return urllib.parse.urlunsplit(parsed._replace(query=build_query_string(merged)))


class TemplateUrlGenerator(UrlGenerator):
    """
    A :py:class:`TemplateUrlGenerator` resolves route names to path templates in which
    ``{name}`` placeholders get substituted by route parameters.  Route parameters that
    have no placeholder in the template are ignored.

    .. code-block:: python

       url_generator = TemplateUrlGenerator({"book": "/book/{id}", "books": "/books"})

    """

    routes: typing.Mapping[str, str]

    def expand(self, template: str, route_params: typing.Mapping[str, typing.Any]) -> str:
        def _(m: "re.Match[str]") -> str:
            name = m.group(1)
            try:
                value = route_params[name]
            except KeyError:
                raise LinkGenerationError(f"missing route parameter {name} for {template}")
            return urllib.parse.quote(str(value), safe="")

        return PLACEHOLDER_RE.sub(_, template)

    def generate(
        self,
        request: RequestContext,
        route_name: str,
        route_params: typing.Mapping[str, typing.Any],
        query_params: typing.Mapping[str, typing.Any],
    ) -> str:
        try:
            template = self.routes[route_name]
        except KeyError:
            raise LinkGenerationError(f"no such route: {route_name}")
        url = request.base_url.rstrip("/") + self.expand(template, route_params)
        qs = build_query_string(query_params)
        if qs:
            url += "?" + qs
        return url

    def __init__(self, routes: typing.Mapping[str, str]):
        self.routes = dict(routes)


class LinkGenerator:
    url_generator: UrlGenerator

    def from_route(
        self,
        rel: str,
        request: RequestContext,
        route: str,
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        query_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        attributes: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> Link:
        """
        Returns a link whose URI is generated from a named route.

        :param str rel: The relation of the link.
        :param RequestContext request: The context of the request being served.
        :param str route: The name of the route.
        :param route_params: Values substituted for the route's placeholders.
        :param query_params: Query string arguments.
        :param attributes: Additional link attributes.
        :raises LinkGenerationError: if the URL generator fails to build the URI.
        """
        href = self.url_generator.generate(
            request, route, route_params or {}, query_params or {}
        )
        return Link(rel=rel, href=href, attributes=dict(attributes or {}))

    def from_url(
        self,
        rel: str,
        url: str,
        attributes: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> Link:
        return Link(rel=rel, href=url, attributes=dict(attributes or {}))

    def __init__(self, url_generator: UrlGenerator):
        self.url_generator = url_generator
