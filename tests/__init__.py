"""
Test suite for pgshape.

- Unit tests for quoting, DDL generation, diffing, migration and merging
- Integration tests against a live PostgreSQL server
"""
