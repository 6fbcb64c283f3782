"""Comparação de segredos em tempo constante, compartilhada pelos connectors."""

from __future__ import annotations

import hmac


def constant_time_equals(provided: str, expected: str) -> bool:
    """Compara dois valores sem curto-circuito pela posição da divergência.

    Compara como bytes: compare_digest rejeita str com caracteres não ASCII.
    """
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))
