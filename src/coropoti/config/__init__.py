"""Configuration package for Streamlit application"""
from .settings import config, AppConfig
from .constants import UI_CONSTANTS, ERROR_MESSAGES
from .env import get_env

__all__ = ['config', 'AppConfig', 'UI_CONSTANTS', 'ERROR_MESSAGES', 'get_env']
