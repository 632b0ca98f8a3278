# party_crawl/content/__init__.py
