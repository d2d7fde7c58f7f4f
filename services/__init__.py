"""
Service layer for business logic.

This package contains the conversion service that runs statement files
through decoding, tokenizing, mapping, aggregation and export, and the
client that fetches the sample statement.
"""
