# party_crawl/engine/__init__.py
