"""
Terminal dashboard over the Company Analytics API.

Each view fetches from one endpoint and prints company cards or a
single metric.
"""
