"""
Core module for application configuration, database setup, and dependency wiring.

This module contains the foundational infrastructure for the package:
- Configuration management
- Database engine and session management
- Diagnostic sink and logging setup
- Custom exceptions
"""
