"""Service layer package housing core business logic.

Contains the option store, the index resolver, the Elasticsearch query
executor and the autosuggest request handler. Each service is wired up by
the app factory and used by routes.
"""
