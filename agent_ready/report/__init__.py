# File: agent_ready/report/__init__.py
"""agent_ready.report: сохранение результатов обхода (JSON и HTML), используется CLI и тестами."""

from __future__ import annotations

from agent_ready.report.html_report import render_html
from agent_ready.report.json_report import render_json

__all__ = ["render_json", "render_html"]
