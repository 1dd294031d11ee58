"""Camada de domínio: tipos, regras puras e contratos de colaboradores."""
