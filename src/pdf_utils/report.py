"""
Report generation for PDF comparison verdicts.

render_html_report(report_struct, out_path) formats a Jinja2 template with:
  - the compared files and the overall status/message
  - one section per compared page with mismatch counts and the diff image
    embedded as base64 PNG
"""

from __future__ import annotations

import base64
import io
import os
from typing import Any, Dict, Optional

from jinja2 import Environment, select_autoescape
from PIL import Image

DEFAULT_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8" />
<title>PDF Compare Report</title>
<style>
body { font-family: Arial, sans-serif; margin: 1.5rem; background: #fafafa; }
h1, h2 { color: #333; }
.diff-section { margin-bottom: 1.5rem; background: white; border-radius: 8px; padding: 16px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
img.diff { max-width: 100%; border: 1px solid #ccc; border-radius: 4px; }
.badge { display: inline-block; padding: 4px 10px; border-radius: 6px; background: #e5e7eb; margin-right: 6px; font-size: 14px; }
.kpi { display: inline-block; padding: 10px 14px; border-radius: 8px; background: white; margin: 6px 6px 0 0; border: 1px solid #e5e7eb; }
.muted { color: #6b7280; font-size: 14px; }
.good { color: #0a7f27; }
.bad  { color: #b91c1c; }
</style>
</head>
<body>
<h1>PDF Compare Report</h1>
<p>
  <span class="badge">Actual: {{ meta.actual }}</span>
  <span class="badge">Baseline: {{ meta.baseline }}</span>
  {% if meta.strategy %}<span class="badge">Strategy: {{ meta.strategy }}</span>{% endif %}
</p>

<h2 class="{{ 'good' if verdict.status == 'passed' else 'bad' }}">{{ verdict.status|upper }}</h2>
{% if verdict.message %}<p>{{ verdict.message }}</p>{% endif %}

{% if pages %}
<h2>Pages</h2>
<div>
  <span class="kpi">Pages compared: {{ pages|length }}</span>
  <span class="kpi">Pages with differences: {{ pages|selectattr('mismatch_count')|list|length }}</span>
</div>
{% for p in pages %}
  <div class="diff-section">
    <strong>Page index {{ p.page_index }}</strong>
    <div class="muted">
      {{ p.mismatch_count }} of {{ p.total_pixels }} pixels differ
      {% if p.perceptual_distance is not none %}| pHash distance {{ p.perceptual_distance }}{% endif %}
      {% if p.diff_path %}| {{ p.diff_path }}{% endif %}
    </div>
    {% if p.diff_png_b64 %}
      <img class="diff" src="data:image/png;base64,{{ p.diff_png_b64 }}" alt="diff page {{ p.page_index }}" />
    {% endif %}
  </div>
{% endfor %}
{% endif %}
</body>
</html>
"""


def _png_b64(img: Optional[Image.Image]) -> str:
    if img is None:
        return ""
    with io.BytesIO() as buf:
        img.save(buf, format="PNG")
        return base64.b64encode(buf.getvalue()).decode("utf-8")


def render_html_report(report_struct: Dict[str, Any], out_path: str | None = None) -> str:
    """Render an HTML string from a comparison report; write it if out_path is given.

    report_struct keys: 'meta' ({'actual', 'baseline', 'strategy'}) and
    'verdict' (a Verdict).
    """
    verdict = report_struct["verdict"]
    pages = [
        {
            "page_index": d.page_index,
            "mismatch_count": d.mismatch_count,
            "total_pixels": d.total_pixels,
            "perceptual_distance": d.perceptual_distance,
            "diff_path": str(d.diff_path) if d.diff_path else "",
            "diff_png_b64": _png_b64(d.diff_image),
        }
        for d in verdict.details or []
    ]

    env = Environment(autoescape=select_autoescape(default_for_string=True))
    html = env.from_string(DEFAULT_TEMPLATE).render(
        meta=report_struct.get("meta", {}),
        verdict=verdict,
        pages=pages,
    )

    if out_path:
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)

    return html
