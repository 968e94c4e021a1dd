"""
Merkle Allowlist Verifier — проверка членства по sorted-pair Merkle proof

Правила коммитмента:
1. Leaf: keccak256(leaf_input), для адресов leaf_input = 20 сырых байт
2. Parent: keccak256(min(a, b) || max(a, b)), порядок байтовый (= числовой
   для 32-байтных значений), поэтому proof не зависит от left/right позиции
3. Root: 32 байта, сравнивается с результатом свёртки proof

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Элемент proof не 32 байта → proof невалиден (без обрезки и padding)
2. Пустой proof валиден только если hash(leaf) == root
3. Функции чистые: нет состояния, нет побочных эффектов
"""

import logging
from typing import Final, Optional, Sequence, Union

from eth_utils import decode_hex, keccak

from src.core.domain.identity import address_bytes

logger = logging.getLogger(__name__)


# Длина узла дерева (keccak256 digest)
NODE_SIZE: Final[int] = 32

Node = Union[bytes, bytearray, str]


# =============================================================================
# HASHING
# =============================================================================


def hash_leaf(leaf_input: bytes) -> bytes:
    """Leaf hash: keccak256(leaf_input)."""
    return keccak(bytes(leaf_input))


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Sorted-pair hash двух узлов.

    Args:
        a, b: 32-байтные узлы

    Returns:
        keccak256(min(a, b) || max(a, b))
    """
    if a <= b:
        return keccak(a + b)
    return keccak(b + a)


# =============================================================================
# COERCION
# =============================================================================


def coerce_node(value: Node) -> Optional[bytes]:
    """
    Приведение узла к 32 байтам.

    Принимает bytes или hex строку (с 0x или без).

    Returns:
        32 байта или None если значение некорректно (длина, не-hex)
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        try:
            raw = decode_hex(value)
        except (ValueError, TypeError):
            return None
    else:
        return None

    if len(raw) != NODE_SIZE:
        return None
    return raw


def coerce_root(root: Node) -> bytes:
    """
    Приведение root к 32 байтам.

    Raises:
        ValueError: Если root не 32 байта
    """
    raw = coerce_node(root)
    if raw is None:
        raise ValueError(f"allowlist root must be exactly {NODE_SIZE} bytes, got {root!r}")
    return raw


# =============================================================================
# VERIFY
# =============================================================================


def process_proof(leaf: bytes, proof: Sequence[Node]) -> Optional[bytes]:
    """
    Свёртка proof от leaf hash до кандидата root.

    Returns:
        Кандидат root или None если какой-то элемент proof некорректен
    """
    computed = leaf
    for index, element in enumerate(proof):
        sibling = coerce_node(element)
        if sibling is None:
            logger.debug("Malformed proof element at index %d", index)
            return None
        computed = hash_pair(computed, sibling)
    return computed


def verify(root: Node, leaf_input: bytes, proof: Sequence[Node]) -> bool:
    """
    Проверка членства leaf_input в множестве, закоммиченном root.

    Args:
        root: 32-байтный коммитмент
        leaf_input: идентичность участника (сырые байты)
        proof: упорядоченные sibling hashes

    Returns:
        True если пересчитанный root совпадает с root
    """
    expected = coerce_node(root)
    if expected is None:
        return False

    computed = process_proof(hash_leaf(leaf_input), proof)
    if computed is None:
        return False
    return computed == expected


def verify_address(root: Node, address: str, proof: Sequence[Node]) -> bool:
    """verify() для адреса: leaf_input = 20 сырых байт адреса."""
    return verify(root, address_bytes(address), proof)
