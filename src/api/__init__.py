"""API: camada de borda HTTP.

Responsabilidades:
- Receber webhooks de plataformas externas
- Aplicar rate limiting por IP e por tenant
- Validar assinaturas, tokens e handshakes
- Entregar webhooks aceitos ao forwarder (via protocolo)

Subpastas:
- connectors/: validadores puros por plataforma
- middleware/: correlation_id, métricas HTTP e limitador geral
- pipeline/: WebhookPipeline (admissão → verificação → entrega)
- routes/: endpoints HTTP (webhooks, health, métricas)

NÃO PODE conter: clientes HTTP de saída, estado global mutável.
"""
