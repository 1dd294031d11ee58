"""Camada de aplicação: sessão de diálogo, executor de comandos e setup SMS."""
