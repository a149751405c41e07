"""
Ingestion layer — fetch the results page and extract its raw table.

Submodules:
  espn_client — httpx fetch + BeautifulSoup table extraction, offline file mode
"""
