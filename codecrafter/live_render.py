"""
Live Render - Build self-contained pages that mount generated components.

React-family code is compiled in the browser with Babel standalone and
mounted under an error boundary, so a broken component renders an error
panel inside the page instead of failing the host. This approach:
- Needs no build step or Node toolchain on the server
- Keeps evaluation inside the preview frame
- Surfaces compile and render errors in place
"""

import html
import json
import re
from typing import Dict, Protocol

from codecrafter import frameworks


# =============================================================================
# CONSTANTS
# =============================================================================

REACT_SCRIPTS = """
<script crossorigin src="https://unpkg.com/react@18/umd/react.development.js"></script>
<script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.development.js"></script>
<script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
"""

# Extra assets per framework
FRAMEWORK_ASSETS: Dict[str, str] = {
    "react-tailwind": '<script src="https://cdn.tailwindcss.com"></script>',
    "react-bootstrap": (
        '<link rel="stylesheet" '
        'href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css">'
    ),
    "next-js": '<script src="https://cdn.tailwindcss.com"></script>',
}

# Globals that replace stripped module imports; the component source runs in
# a nested block so it may shadow any of them
RUNTIME_PRELUDE = """
const { useState, useEffect, useRef, useMemo, useCallback, useContext,
        useReducer, useLayoutEffect, createContext, Fragment } = React;
const Link = ({ href, children, ...rest }) => React.createElement('a', { href, ...rest }, children);
const Image = ({ src, alt, ...rest }) => React.createElement('img', { src, alt, ...rest });
const Head = () => null;
"""

_IMPORT_RE = re.compile(
    r"^[ \t]*import\s+(?:[\w$*{}\s,]+?\s+from\s+)?['\"][^'\"]+['\"];?[ \t]*$", re.MULTILINE
)
_DIRECTIVE_RE = re.compile(r"^\s*['\"]use (?:client|server)['\"];?\s*$", re.MULTILINE)
_EXPORT_DEFAULT_DECL_RE = re.compile(r"export\s+default\s+(?=(?:async\s+)?function\b|class\b)")
_EXPORT_DEFAULT_NAME_RE = re.compile(r"^\s*export\s+default\s+([A-Za-z_$][\w$]*)\s*;?\s*$", re.MULTILINE)
_EXPORT_DEFAULT_EXPR_RE = re.compile(r"export\s+default\s+")
_NAMED_EXPORT_RE = re.compile(r"^(\s*)export\s+(?=(?:async\s+)?function\b|const\b|let\b|var\b|class\b)", re.MULTILINE)
_COMPONENT_DECL_RE = re.compile(
    r"(?:function|class)\s+([A-Z][\w$]*)|(?:const|let|var)\s+([A-Z][\w$]*)\s*="
)


class LiveRenderer(Protocol):
    """Mounts component source into a self-contained preview document."""

    def mount(self, code: str, framework_id: str, epoch: int) -> str:
        ...

    def unmount(self, token: str) -> None:
        ...


# =============================================================================
# SOURCE PREPARATION
# =============================================================================

def prepare_component_source(code: str) -> str:
    """
    Rewrite module-style component code into a browser script.

    Imports and framework directives are dropped, exports are unwrapped and
    the default export is bound to ``__PreviewComponent``.

    Args:
        code: Generated JSX source

    Returns:
        Script source ready for Babel
    """
    source = _DIRECTIVE_RE.sub("", code)
    source = _IMPORT_RE.sub("", source)

    component = None

    # export default function Foo() / export default class Foo
    match = re.search(r"export\s+default\s+(?:async\s+)?(?:function|class)\s+([A-Za-z_$][\w$]*)", source)
    if match:
        component = match.group(1)
        source = _EXPORT_DEFAULT_DECL_RE.sub("", source, count=1)
    else:
        # export default Foo;
        match = _EXPORT_DEFAULT_NAME_RE.search(source)
        if match:
            component = match.group(1)
            source = _EXPORT_DEFAULT_NAME_RE.sub("", source, count=1)
        elif _EXPORT_DEFAULT_EXPR_RE.search(source):
            # export default () => ... / anonymous function
            source = _EXPORT_DEFAULT_EXPR_RE.sub("const __PreviewComponent = ", source, count=1)
            component = "__PreviewComponent"

    source = _NAMED_EXPORT_RE.sub(r"\1", source)

    if component is None:
        match = _COMPONENT_DECL_RE.search(source)
        if match:
            component = match.group(1) or match.group(2)

    if component is None:
        binding = "const __PreviewComponent = null;"
    elif component == "__PreviewComponent":
        binding = ""
    else:
        binding = f"const __PreviewComponent = {component};"

    return f"{source.strip()}\n{binding}\n"


def script_literal(value: str) -> str:
    """JSON-encode a string so it can sit inside a <script> element."""
    return json.dumps(value).replace("</", "<\\/")


# =============================================================================
# PAGE BUILDERS
# =============================================================================

def _react_page(code: str, framework_id: str, epoch: int) -> str:
    source = prepare_component_source(code)
    assets = FRAMEWORK_ASSETS.get(framework_id, "")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<!-- preview epoch {epoch} -->
{REACT_SCRIPTS}
{assets}
<style>
  body {{ margin: 0; font-family: system-ui, sans-serif; }}
  .preview-error {{ margin: 16px; padding: 12px 16px; border-radius: 8px;
    background: #fdecea; color: #8a1c1c; font-family: monospace; white-space: pre-wrap; }}
</style>
</head>
<body>
<div id="root"></div>
<script>
(function () {{
  const rootEl = document.getElementById('root');
  const showError = (label, err) => {{
    rootEl.innerHTML = '';
    const box = document.createElement('div');
    box.className = 'preview-error';
    box.textContent = label + ': ' + (err && err.message ? err.message : String(err));
    rootEl.appendChild(box);
  }};
  window.addEventListener('error', (e) => {{ showError('Runtime error', e.error || e.message); e.preventDefault(); }});
  window.addEventListener('unhandledrejection', (e) => {{ showError('Unhandled rejection', e.reason); e.preventDefault(); }});

  class PreviewErrorBoundary extends React.Component {{
    constructor(props) {{ super(props); this.state = {{ error: null }}; }}
    static getDerivedStateFromError(error) {{ return {{ error }}; }}
    render() {{
      if (this.state.error) {{
        return React.createElement('div', {{ className: 'preview-error' }},
          'Render error: ' + this.state.error.message);
      }}
      return this.props.children;
    }}
  }}

  const prelude = {script_literal(RUNTIME_PRELUDE)};
  const source = {script_literal(source)};
  try {{
    const compiled = Babel.transform(prelude + '\\n{{\\n' + source + '\\nreturn __PreviewComponent;\\n}}', {{
      presets: ['react'],
      parserOpts: {{ allowReturnOutsideFunction: true }},
    }}).code;
    const Component = new Function('React', 'ReactDOM', compiled)(React, ReactDOM);
    if (!Component) {{
      showError('Preview error', 'No component found in the generated code');
      return;
    }}
    ReactDOM.createRoot(rootEl).render(
      React.createElement(PreviewErrorBoundary, null, React.createElement(Component))
    );
  }} catch (err) {{
    showError('Compile error', err);
  }}
}})();
</script>
</body>
</html>"""


def _unsupported_page(code: str, label: str, epoch: int) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<!-- preview epoch {epoch} -->
<style>
  body {{ margin: 0; padding: 16px; font-family: system-ui, sans-serif; color: #222; }}
  pre {{ background: #f4f4f5; padding: 12px; border-radius: 8px; overflow: auto; }}
</style>
</head>
<body>
<p><strong>{html.escape(label)}</strong> components can't be previewed live in the browser.
Download the code and run it in a {html.escape(label)} project.</p>
<pre><code>{html.escape(code)}</code></pre>
</body>
</html>"""


# =============================================================================
# RENDERER
# =============================================================================

class BabelLiveRenderer:
    """Default live renderer: client-side Babel for React-family targets."""

    # Targets with no in-browser compiler
    UNSUPPORTED = frozenset({"angular"})

    def __init__(self):
        self.mounted: Dict[str, str] = {}

    def mount(self, code: str, framework_id: str, epoch: int) -> str:
        """
        Build the preview document for a component.

        Returns:
            Complete HTML string
        """
        entry = frameworks.resolve(framework_id)
        if entry.id in self.UNSUPPORTED:
            page = _unsupported_page(code, entry.label, epoch)
        else:
            page = _react_page(code, entry.id, epoch)
        self.mounted[f"{entry.id}:{epoch}"] = page
        return page

    def unmount(self, token: str) -> None:
        self.mounted.pop(token, None)
