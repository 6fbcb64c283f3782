"""Connector Mercado Pago (validação de webhooks)."""

from api.connectors.mercadopago.signature import (
    DATA_ID_PARAM,
    REQUEST_ID_HEADER,
    SIGNATURE_HEADER,
    build_manifest,
    parse_x_signature,
    verify_mercadopago_signature,
)

__all__ = [
    "DATA_ID_PARAM",
    "REQUEST_ID_HEADER",
    "SIGNATURE_HEADER",
    "build_manifest",
    "parse_x_signature",
    "verify_mercadopago_signature",
]
