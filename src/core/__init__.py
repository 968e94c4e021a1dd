"""
Core domain models, unit conversions, configuration and error taxonomy.

This module contains the foundational building blocks that are independent
of external collaborators (token registry, funds custody, host runtime).
"""
