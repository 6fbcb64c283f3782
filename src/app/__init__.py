"""App: composição do serviço e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- infra/: implementações concretas (rate limiter, forwarder HTTP)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas Prometheus

Padrão: app executa; api adapta; config configura; utils apoia.
"""
