"""HTML pages for the browsable endpoints."""

from deps import html

_STYLE = """
    body { font-family: system-ui, sans-serif; max-width: 42rem; margin: 2rem auto; padding: 0 1rem; }
    h1 { font-size: 1.25rem; font-weight: 600; }
    ul { list-style: none; padding: 0; }
    li { margin: 0.5rem 0; }
    a { color: #2563eb; text-decoration: none; }
    a:hover { text-decoration: underline; }
    pre { background: #f1f5f9; padding: 0.75rem; overflow-x: auto; }
    .meta { color: #64748b; font-size: 0.875rem; margin-top: 1.5rem; }
"""

_NAV = (
    '<p class="meta"><a href="/">Home</a> · <a href="/docs">Swagger UI</a> · '
    '<a href="/redoc">ReDoc</a> · <a href="/health">Health</a></p>'
)

_ROOT_BODY = """
  <p>Finds debugging leftovers in Node-RED function nodes and scores their quality.</p>
  <p>Endpoints:</p>
  <ul>
    <li><a href="/docs">/docs</a>: Swagger UI</li>
    <li><a href="/redoc">/redoc</a>: ReDoc</li>
    <li><a href="/health">/health</a>: Liveness</li>
    <li><a href="/check">/check</a>: Analyze one function body (POST)</li>
    <li>/score/unit, /score/group, /score/system: Score posted issues (POST)</li>
    <li>/scan: Analyze every function node of a flows.json export (POST)</li>
    <li>/metrics/groups/{group_id}: Stored quality history of a flow</li>
  </ul>
"""

_CHECK_BODY = """
  <p>POST JSON to <code>/check</code>:</p>
  <pre>{"code": "node.warn(msg);\\nreturn msg;", "detection_level": 2}</pre>
  <p><code>detection_level</code> is 1 (critical only), 2 (default) or 3 (everything).
  Suppress findings with <code>// @nr-analyzer-ignore-start</code> / <code>// @nr-analyzer-ignore-end</code>.</p>
"""

_PAGES = {
    "root.html": _ROOT_BODY,
    "check.html": _CHECK_BODY,
}


def render_template(name: str, title: str) -> str:
    """Wrap a page body in the shared layout."""
    body = _PAGES[name]
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{html.escape(title)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <h1>{html.escape(title)}</h1>
{body}
  {_NAV}
</body>
</html>
"""
