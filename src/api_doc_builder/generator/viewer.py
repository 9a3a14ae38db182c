"""Interactive viewer: a static Swagger UI page with the API description embedded.

The document text is embedded exactly as it was read, not re-serialized from
the extracted model, so the viewer shows every field of the source.
"""

import html
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SWAGGER_UI_DIST = "https://unpkg.com/swagger-ui-dist@5"

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <title>{title}</title>
  <link rel="stylesheet" type="text/css" href="{dist}/swagger-ui.css" />
  <style>
    body {{
      margin: 0;
      padding: 0;
    }}
    #swagger-ui {{
      box-sizing: border-box;
    }}
  </style>
</head>
<body>
  <div id="swagger-ui"></div>

  <script src="{dist}/swagger-ui-bundle.js"></script>
  <script src="{dist}/swagger-ui-standalone-preset.js"></script>
  <script>
    const specText = {spec};
    const specUrl = URL.createObjectURL(new Blob([specText], {{ type: "text/plain" }}));

    window.ui = SwaggerUIBundle({{
      url: specUrl,
      dom_id: "#swagger-ui",
      presets: [
        SwaggerUIBundle.presets.apis,
        SwaggerUIStandalonePreset
      ],
      layout: "BaseLayout"
    }});
  </script>
</body>
</html>
"""


def render_viewer(title: str, spec_text: str) -> str:
    """Return the viewer HTML for the given title and raw spec text."""
    return _PAGE.format(title=html.escape(title), dist=SWAGGER_UI_DIST, spec=_js_string(spec_text))


def write_viewer(output: Path, title: str, spec_text: str) -> Path:
    """Write the viewer page to ``output`` and return the path."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_viewer(title, spec_text), encoding="utf-8")
    logger.info("Wrote viewer page to %s", output)
    return output


def _js_string(text: str) -> str:
    # \u003c decodes to "<" in JS but cannot open or close a tag in the page
    return json.dumps(text).replace("<", "\\u003c")
