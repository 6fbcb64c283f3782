"""Connectors por canal: validação de borda dos webhooks recebidos.

Estrutura:
- meta/: handshake hub.* e assinatura HMAC (WhatsApp, Messenger, Instagram,
  reaproveitada por Webchat e Tawk.to)
- telegram/: secret token consultivo
- mercadopago/: header x-signature com manifest e timestamp
- google_calendar/: token de canal das notificações push

Funções puras: recebem bytes/strings e levantam GatewayError; não fazem IO
nem log.
"""

__all__: list[str] = []
