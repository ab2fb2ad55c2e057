import html
from typing import List
import click
from cachecheck.logic.result import InspectionResult
from cachecheck.utils.snippets import curl_command

NOT_SPECIFIED = "Not specified"

HEADER_GROUPS = [
    ("security_headers", "Security Related Headers"),
    ("useful_headers", "Other Headers"),
    ("fastly_debug", "Fastly-Debug Headers"),
    ("pantheon_debug", "Pantheon-Debug Headers"),
    ("cloudflare_debug", "Cloudflare Headers"),
    ("cloudfront_debug", "CloudFront Headers"),
]

def score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"

def status_color(status: int) -> str:
    if 200 <= status < 300:
        return "green"
    if 300 <= status < 400:
        return "blue"
    if 400 <= status < 500:
        return "yellow"
    return "red"

def _details(result: InspectionResult):
    return [
        ("Cache-Control", result.cache_control),
        ("Age", result.age),
        ("Expires", result.expires),
        ("Last-Modified", result.last_modified),
        ("ETag", result.etag),
        ("X-Served-By", result.served_by),
        ("X-Cache-Hits", result.cache_hits),
    ]

class Reporter:
    @staticmethod
    def render_text(result: InspectionResult, color: bool = True) -> str:
        """
        Plain-text report for the terminal. ANSI styles are added only when
        color is True; click.echo strips them again on non-tty output.
        """
        def style(text, **kwargs):
            return click.style(text, **kwargs) if color else text

        lines = [
            style(result.url, bold=True) + "  " + style(f"[{result.status}]", fg=status_color(result.status)),
            "",
            result.summary,
            "",
            f"Server Type:   {result.server or 'Unknown'}",
            f"Cache Status:  {result.cache_status or NOT_SPECIFIED}",
            f"Response Time: {result.response_time} ms",
        ]
        if result.http_version:
            lines.append(f"HTTP Version:  {result.http_version}")
        if result.ip_address:
            lines.append(f"IP Address:    {result.ip_address}")
        if result.ip_location:
            lines.append(f"Location:      {result.ip_location}")
        if result.ip_org:
            lines.append(f"Organization:  {result.ip_org}")

        lines += ["", style("Caching Details", bold=True)]
        for name, value in _details(result):
            lines.append(f"  {name + ':':<15}{value or NOT_SPECIFIED}")

        filled = result.score // 5
        bar = "#" * filled + "-" * (20 - filled)
        lines.append("")
        lines.append("Caching Score: " + style(f"{result.score}/100 [{bar}]", fg=score_color(result.score)))

        if result.suggestions:
            lines += ["", style("Performance Suggestions", bold=True)]
            lines += [f"  - {s}" for s in result.suggestions]

        for attr, title in HEADER_GROUPS:
            entries = getattr(result, attr)
            if entries:
                lines += ["", style(title, bold=True)]
                lines += [f"  {entry}" for entry in entries]

        return "\n".join(lines)

    @staticmethod
    def generate_html_report(results: List[InspectionResult], output_path: str):
        """
        Write a standalone HTML report with one card per inspected URL.
        """
        cards = "\n".join(Reporter._html_card(r) for r in results)
        document = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>cachecheck - HTTP Caching Report</title>
<style>
body {{ font-family: -apple-system, Arial, sans-serif; margin: 24px; background: #f7f7fa; color: #1f2937; }}
.card {{ background: #fff; border-radius: 12px; box-shadow: 0 2px 8px rgba(0,0,0,.08); margin-bottom: 24px; overflow: hidden; }}
.head {{ padding: 20px; background: linear-gradient(90deg, #eff6ff, #eef2ff); }}
.head h2 {{ margin: 0 0 8px; font-size: 18px; word-break: break-all; }}
.status {{ padding: 2px 10px; border-radius: 999px; font-size: 13px; }}
.green {{ color: #16a34a; }} .orange {{ color: #f97316; }} .red {{ color: #ef4444; }} .blue {{ color: #2563eb; }}
.body {{ padding: 20px; }}
table {{ border-collapse: collapse; width: 100%; margin-bottom: 16px; }}
td {{ border-bottom: 1px solid #e5e7eb; padding: 6px 8px; vertical-align: top; }}
td.k {{ color: #6b7280; width: 180px; }}
.bar {{ height: 8px; background: #e5e7eb; border-radius: 4px; overflow: hidden; }}
.bar div {{ height: 100%; }}
.suggestions {{ background: #fefce8; border-left: 4px solid #facc15; padding: 8px 16px; }}
pre {{ background: #111827; color: #e5e7eb; padding: 12px; border-radius: 8px; overflow-x: auto; }}
</style>
</head>
<body>
<h1>cachecheck - HTTP Caching Report</h1>
{cards}
</body>
</html>
"""
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(document)

    @staticmethod
    def _html_card(result: InspectionResult) -> str:
        esc = html.escape
        css = {"green": "green", "yellow": "orange", "red": "red", "blue": "blue"}
        score_css = css[score_color(result.score)]
        bar_colors = {"green": "#22c55e", "orange": "#f97316", "red": "#ef4444"}

        info_rows = [
            ("Server Type", result.server or "Unknown"),
            ("Cache Status", result.cache_status or NOT_SPECIFIED),
            ("Response Time", f"{result.response_time} ms"),
        ]
        if result.http_version:
            info_rows.append(("HTTP Version", result.http_version))
        if result.ip_address:
            info_rows.append(("IP Address", result.ip_address))
        if result.ip_location:
            info_rows.append(("Location", result.ip_location))
        if result.ip_org:
            info_rows.append(("Organization", result.ip_org))
        info_rows += [(k, v or NOT_SPECIFIED) for k, v in _details(result)]
        rows = "\n".join(f'<tr><td class="k">{esc(k)}</td><td>{esc(str(v))}</td></tr>' for k, v in info_rows)

        suggestions = ""
        if result.suggestions:
            items = "".join(f"<li>{esc(s)}</li>" for s in result.suggestions)
            suggestions = f'<div class="suggestions"><h4>Performance Suggestions</h4><ul>{items}</ul></div>'

        groups = []
        for attr, title in HEADER_GROUPS:
            entries = getattr(result, attr)
            if entries:
                groups.append(f"<h4>{esc(title)}</h4><pre>{esc(chr(10).join(entries))}</pre>")

        return f"""<div class="card">
<div class="head">
<h2>{esc(result.url)} <span class="status {css[status_color(result.status)]}">{result.status}</span></h2>
<p>{esc(result.summary)}</p>
</div>
<div class="body">
<table>
{rows}
</table>
<p>Caching Score: <strong class="{score_css}">{result.score}/100</strong></p>
<div class="bar"><div style="width: {result.score}%; background: {bar_colors[score_css]};"></div></div>
{suggestions}
{''.join(groups)}
<h4>Reproduce with curl</h4>
<pre>{esc(curl_command(result.url))}</pre>
</div>
</div>"""
