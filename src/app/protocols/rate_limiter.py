"""Protocolo de domínio para admissão por rate limit.

Interface leve (ABC) dependida pelo pipeline de validação.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RateLimiterProtocol(ABC):
    """Contrato mínimo de um limitador por chave.

    Métodos canônicos:
    - allow(key) -> bool: consome uma permissão se houver.
    - evict_stale(now) -> int: descarta estado ocioso e retorna quantos.
    """

    name: str

    @abstractmethod
    def allow(self, key: str) -> bool:
        """Admite ou rejeita uma requisição para a chave.

        Args:
            key: IP do cliente, tenant_id ou literal fixo

        Returns:
            True se admitida (uma permissão consumida); False caso contrário.
        """

    @abstractmethod
    def evict_stale(self, now: float | None = None) -> int:
        """Remove estado de chaves ociosas além do TTL.

        Returns:
            Quantidade de chaves removidas.
        """
