"""Adaptadores FastAPI: app factory, rotas e dependências."""
