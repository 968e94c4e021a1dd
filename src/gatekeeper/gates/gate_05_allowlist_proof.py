"""GATE 5: Merkle proof членства в allowlist (только presale)

leaf = keccak256(20 байт адреса caller), свёртка proof sorted-pair хешем,
сравнение с закоммиченным root. Некорректный элемент proof → блокировка.

Самая дорогая проверка без мутаций: выполняется только после дешёвых
gates 0-4.
"""

from dataclasses import dataclass
from typing import Sequence

from src.allowlist.merkle import Node, verify_address
from src.gatekeeper.gates.gate_04_supply_cap import Gate04Result


@dataclass(frozen=True)
class Gate05Result:
    """Результат GATE 5."""

    entry_allowed: bool
    block_reason: str

    caller: str
    proof_length: int

    # Детали
    details: str


class Gate05AllowlistProof:
    """GATE 5: verify(root, caller, proof)."""

    def __init__(self, root: bytes):
        """
        Args:
            root: 32-байтный коммитмент allowlist
        """
        self.root = root

    def evaluate(
        self,
        gate04_result: Gate04Result,
        caller: str,
        proof: Sequence[Node],
    ) -> Gate05Result:
        """Оценка GATE 5.

        Args:
            gate04_result: результат GATE 4
            caller: адрес вызывающего (leaf input)
            proof: sibling hashes

        Returns:
            Gate05Result с решением о допуске
        """
        if not gate04_result.entry_allowed:
            return Gate05Result(
                entry_allowed=False,
                block_reason=f"gate04_blocked: {gate04_result.block_reason}",
                caller=caller,
                proof_length=len(proof),
                details=f"GATE 4 blocked: {gate04_result.block_reason}"
            )

        if not verify_address(self.root, caller, proof):
            return Gate05Result(
                entry_allowed=False,
                block_reason="invalid_merkle_proof",
                caller=caller,
                proof_length=len(proof),
                details=f"Invalid Merkle proof for {caller} ({len(proof)} elements)"
            )

        return Gate05Result(
            entry_allowed=True,
            block_reason="",
            caller=caller,
            proof_length=len(proof),
            details=f"PASS: {caller} is allowlisted"
        )
