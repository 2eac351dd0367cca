"""Parsers for documents fetched during a crawl."""
