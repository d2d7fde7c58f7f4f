"""
Core processing modules for card statement conversion.

This package contains:
- aggregate: Summary statistics over transaction records
- config: Application configuration and settings
- encoding: Byte decoding with encoding detection
- exceptions: Custom exception classes
- exporters: Ledger import CSV rendering
- logger: Logging configuration
- mapping: Statement row to transaction record mapping
- schema: Pydantic models for records and export configuration
- tokenizer: Quote-aware CSV tokenizer
"""
