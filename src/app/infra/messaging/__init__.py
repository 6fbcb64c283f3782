"""Clientes do serviço de mensageria downstream."""

from app.infra.messaging.forwarder import MessagingServiceForwarder, build_forward_payload

__all__ = ["MessagingServiceForwarder", "build_forward_payload"]
