# agent_ready/report/json_report.py

"""
Генерация JSON-файла с результатами обхода для проекта AgentReady.

Формат: список объектов ``{"url": ..., "html": ...}`` в порядке обхода,
тот же, что CLI печатает в stdout.
"""
import json
from pathlib import Path

from agent_ready.crawler.models import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, *, pretty: bool = False) -> Path:
    """
    Сохраняет страницы отчёта report в формате JSON по указанному пути.

    :param report: объект CrawlReport с результатами обхода
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла

    Пример:
    ```python
    from agent_ready.report.json_report import render_json
    report_path = render_json(report, 'out/pages.json')
    print(f"JSON saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.records(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
