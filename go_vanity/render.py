"""HTML rendering for import pages and the package index, via Jinja2."""

from __future__ import annotations

import logging
from typing import Iterable

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError, select_autoescape

from .models import PackageRecord

log = logging.getLogger(__name__)

IMPORT_TEMPLATE = "import.html"
INDEX_TEMPLATE = "index.html"

_IMPORT_PAGE = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="go-import" content="{{ record.import_path }} git {{ record.repo_url }}">
    <meta name="go-source" content="{{ record.import_path }} {{ record.repo_url }} {{ record.repo_url }}/tree/{{ record.default_branch }}{/dir} {{ record.repo_url }}/blob/{{ record.default_branch }}{/dir}/{file}#L{line}">
    <meta http-equiv="refresh" content="0; url={{ record.repo_url }}">
</head>
<body>
    Redirecting to <a href="{{ record.repo_url }}">{{ record.repo_url }}</a>...
</body>
</html>
"""

_INDEX_PAGE = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{{ base_domain }}</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, 'Open Sans', 'Helvetica Neue', sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 2rem;
            line-height: 1.6;
        }
        .package-list { margin-top: 2rem; }
        .package-item {
            margin-bottom: 1.5rem;
            padding: 1rem;
            border: 1px solid #eee;
            border-radius: 4px;
        }
        .package-item h3 { margin: 0 0 0.5rem 0; }
        .package-item p { margin: 0.5rem 0; color: #666; }
        code {
            background: #f5f5f5;
            padding: 0.2rem 0.4rem;
            border-radius: 3px;
            font-size: 0.9em;
        }
    </style>
</head>
<body>
    <h1>{{ base_domain }}</h1>
    <p>This is the package index for {{ base_domain }} Go packages.</p>
    <p>To use these packages in your Go project, import them using the <code>{{ base_domain }}/...</code> import path.</p>

    <div class="package-list">
        <h2>Available Packages</h2>
        {% for record in records %}
        <div class="package-item">
            <h3><a href="{{ record.repo_url }}">{{ record.import_path }}</a></h3>
            {% if record.description %}
            <p>{{ record.description }}</p>
            {% endif %}
            <p><code>go get {{ record.import_path }}</code></p>
        </div>
        {% endfor %}
    </div>
</body>
</html>
"""

_env = Environment(
    loader=DictLoader({IMPORT_TEMPLATE: _IMPORT_PAGE, INDEX_TEMPLATE: _INDEX_PAGE}),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


class RenderError(Exception):
    """Raised when a page template fails to render."""


def _render(template_name: str, **variables) -> bytes:
    try:
        return _env.get_template(template_name).render(**variables).encode("utf-8")
    except TemplateError as e:
        raise RenderError(f"Rendering {template_name} failed: {e}") from e


def render_import_page(record: PackageRecord) -> bytes:
    """Redirect page carrying go-import, go-source and refresh meta tags."""
    return _render(IMPORT_TEMPLATE, record=record)


def render_index_page(records: Iterable[PackageRecord], base_domain: str) -> bytes:
    """Listing of every record with its description (if any) and a `go get` line."""
    records = list(records)
    log.debug("Rendering index for %d packages", len(records))
    return _render(INDEX_TEMPLATE, records=records, base_domain=base_domain)
