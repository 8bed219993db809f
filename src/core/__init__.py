"""
Core domain models, money primitives, contracts and configuration.

This module contains the foundational building blocks that are independent
of the presentation layer (console, GUI) and of the storage location.
"""
