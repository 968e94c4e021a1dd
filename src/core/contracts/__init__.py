"""
Contract Validation Module

JSON Schema контракты mint системы: запрос на mint и снапшот состояния.
"""

from .validators import (
    SCHEMA_DIR,
    MintRequestContract,
    MintStateContract,
    SchemaContract,
    load_schema,
    validate_mint_request,
    validate_mint_state,
)

__all__ = [
    "SCHEMA_DIR",
    # Classes
    "SchemaContract",
    "MintRequestContract",
    "MintStateContract",
    # Functions
    "load_schema",
    "validate_mint_request",
    "validate_mint_state",
]
