"""
News aggregator: pulls articles from external news APIs into one store and
serves them over a read-only REST API.
"""
