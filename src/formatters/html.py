import json
from html import escape as html_escape
from typing import Any

from edit_matrix.utils import EditKind, count_operations
from formatters.base import BaseFormatter, FormatterFactory, render_element


DEFAULT_STYLES = """
body { font-family: monospace; margin: 20px; background: #fafafa; color: #333; }
.diff-container { border: 1px solid #ddd; border-radius: 4px; overflow: hidden; margin-bottom: 20px; }
.diff-header { background: #f7f7f7; padding: 10px 15px; border-bottom: 1px solid #ddd; font-weight: bold; }
table { width: 100%; border-collapse: collapse; font-size: 13px; }
td { padding: 2px 8px; vertical-align: top; white-space: pre-wrap; word-wrap: break-word; }
.index { width: 50px; text-align: right; color: #999; background: #f7f7f7; border-right: 1px solid #eee; }
.skip { background: #fff; }
.delete { background: #ffeef0; }
.insert { background: #e6ffed; }
.replace { background: #fff5b1; }
.marker { width: 20px; text-align: center; font-weight: bold; }
.stats { padding: 10px 15px; background: #f7f7f7; border-top: 1px solid #ddd; font-size: 12px; }
"""

MARKERS = {
    EditKind.SKIP: " ",
    EditKind.INSERT: "+",
    EditKind.DELETE: "-",
    EditKind.REPLACE: "~",
}


def _cell(value: Any) -> str:
    return html_escape(render_element(value))


class HTMLFormatter(BaseFormatter):
    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        rows = []
        for kind, x, y in script:
            left = _cell(source[x]) if kind != EditKind.INSERT else ""
            right = _cell(target[y]) if kind != EditKind.DELETE else ""
            left_idx = x if kind != EditKind.INSERT else ""
            right_idx = y if kind != EditKind.DELETE else ""
            rows.append(f'<tr class="{kind.value}"><td class="index">{left_idx}</td><td>{left}</td>'
                        f'<td class="marker">{MARKERS[kind]}</td>'
                        f'<td class="index">{right_idx}</td><td>{right}</td></tr>')
        counts = count_operations(script)
        html = f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Diff: {html_escape(source_name)} vs {html_escape(target_name)}</title>
<style>{DEFAULT_STYLES}</style></head><body>
<div class="diff-container">
<div class="diff-header"><span>--- {html_escape(source_name)}</span><br><span>+++ {html_escape(target_name)}</span></div>
<table>{"".join(rows)}</table>
<div class="stats">+{counts['inserts']}, -{counts['deletes']}, ~{counts['replaces']}</div>
</div></body></html>"""
        self._write(html)


class JSONFormatter(BaseFormatter):
    def _format_impl(self, script, source, target, source_name, target_name, matrix):
        result = {
            "source": source_name,
            "target": target_name,
            "distance": matrix[-1] if matrix is not None and len(matrix) else None,
            "edits": [],
            "stats": count_operations(script),
        }
        for kind, x, y in script:
            edit = {"kind": kind.value, "source_index": x, "target_index": y}
            if kind != EditKind.INSERT:
                edit["source"] = render_element(source[x])
            if kind != EditKind.DELETE:
                edit["target"] = render_element(target[y])
            result["edits"].append(edit)
        self._write(json.dumps(result, indent=2, ensure_ascii=False, default=str))


FormatterFactory.register("html", HTMLFormatter)
FormatterFactory.register("json", JSONFormatter)
