"""Adaptadores de infraestrutura (persistência, SMS, fala, contexto do app)."""
