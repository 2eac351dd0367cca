# === FILE: agent_ready/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода сайта.
"""
from agent_ready.config import CrawlConfig
from agent_ready.crawler.crawler import AsyncCrawler
from agent_ready.crawler.models import CrawlReport


async def crawl_site(cfg: CrawlConfig) -> CrawlReport:
    """
    Запускает асинхронный краулер в контексте и возвращает отчёт об обходе.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.

    Returns
    -------
    CrawlReport
        Загруженные страницы (CrawlResult) и неудачные запросы (FetchOutcome).
    """
    async with AsyncCrawler(cfg) as crawler:
        await crawler.crawl()
        return crawler.report

__all__ = ["crawl_site"]
