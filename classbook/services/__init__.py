"""
Service layer for business logic.

This layer keeps lesson rules (time guards, identifier checks) apart from
request handling and from persistence, so the rules can be tested with
mocked repositories.
"""
