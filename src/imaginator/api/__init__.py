"""Imaginator — FastAPI REST API layer.

This package exposes generation and stateless editing over HTTP for
headless use.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
"""
