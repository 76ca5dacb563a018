"""
Beyond NP.

- backend/: REST API, database models, services, configuration
"""
