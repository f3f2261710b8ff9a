"""
News Blueprint - API-key-gated news feed built on Google News RSS

This blueprint provides functionality to:
- Fetch headlines, topic, search and location feeds from Google News
- Drop articles from paywalled sources
- Split the publisher name out of Google News titles
"""
