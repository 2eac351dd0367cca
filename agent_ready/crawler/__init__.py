"""Crawler core: fetching, sitemap discovery, link extraction, path filtering and scheduling."""
