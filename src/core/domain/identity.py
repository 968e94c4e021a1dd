"""
Identity — нормализация адресов участников

Адрес — 20-байтная строка, передаётся как hex (checksum или lowercase).
Сравнение идентичностей выполняется только в нормализованной форме
(EIP-55 checksum), leaf input allowlist — сырые 20 байт адреса.
"""

from eth_utils import is_hex_address, to_canonical_address, to_checksum_address


def normalize_address(address: str) -> str:
    """
    Нормализация адреса в checksum форму.

    Args:
        address: hex адрес (с префиксом 0x или без)

    Returns:
        EIP-55 checksum адрес

    Raises:
        ValueError: Если строка не является 20-байтным hex адресом
    """
    if not isinstance(address, str) or not is_hex_address(address):
        raise ValueError(f"not a 20-byte hex address: {address!r}")
    return to_checksum_address(address)


def address_bytes(address: str) -> bytes:
    """Сырые 20 байт адреса (leaf input для Merkle allowlist)."""
    return to_canonical_address(normalize_address(address))


def same_identity(a: str, b: str) -> bool:
    """Сравнение двух адресов независимо от регистра."""
    return normalize_address(a) == normalize_address(b)
