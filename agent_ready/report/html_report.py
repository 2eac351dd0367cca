# File: agent_ready/report/html_report.py
"""agent_ready.report.html_report: HTML-сводка обхода с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from agent_ready.crawler.models import CrawlReport

TEMPLATE_NAME = "crawl_report.html.j2"


def _loader(template_dir: Optional[Union[Path, str]]) -> BaseLoader:
    if template_dir is None:
        return PackageLoader("agent_ready", "templates")
    return FileSystemLoader(str(template_dir))


def render_html(
    report: CrawlReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-сводку обхода и сохраняет её по указанному пути.

    Args:
        report: объект CrawlReport.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория со своим ``crawl_report.html.j2``;
            по умолчанию используется шаблон из пакета.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=_loader(template_dir),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "pages": [{"url": p.url, "size": len(p.html)} for p in report.pages],
        "failures": [
            {"url": f.url, "reason": f.error.reason if f.error else "", "status": f.error.status if f.error else None}
            for f in report.failures
        ],
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
