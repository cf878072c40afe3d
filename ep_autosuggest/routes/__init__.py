"""Route blueprints package for API endpoints.

Contains Flask blueprints for the autosuggest endpoint and the API docs.
Each module documents its endpoint responsibilities and JSON contracts.
"""
