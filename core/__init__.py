"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- The error-reporting base for management commands
- Health check views
"""
