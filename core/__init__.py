"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, value objects and exceptions
- The in-memory event bus and audit handler
- Observability: metrics, tracing and middleware
- Health, service info and metrics views
- Administrative management commands
"""
