"""
QueryGate Source Package

Admission gate for LLM-generated SQL.

Subpackages:
- api: FastAPI REST endpoints
- core: Configuration, logging, exceptions
- services: LLM tool adapters
- utils: The SQL admission gate
"""
