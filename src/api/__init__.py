"""
API Package

FastAPI REST API for QueryGate.

Subpackages:
- routers: API route handlers

Main module:
- main: FastAPI application setup
"""
