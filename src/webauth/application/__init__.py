"""Estágios do pipeline de request: sessão, usuário e composição."""

from webauth.application.context import AuthContext, get_auth_context
from webauth.application.errors import PipelineConfigError
from webauth.application.pipeline import (
    AuthPipeline,
    AuthPipelineBuilder,
    build_pipeline_from_settings,
    cookie_settings_from,
)
from webauth.application.session_manager import CookieSettings, SessionManager
from webauth.application.user_manager import UserManager

__all__ = [
    "AuthContext",
    "AuthPipeline",
    "AuthPipelineBuilder",
    "CookieSettings",
    "PipelineConfigError",
    "SessionManager",
    "UserManager",
    "build_pipeline_from_settings",
    "cookie_settings_from",
    "get_auth_context",
]
