"""
Utility modules for the quote service
"""
from .config_loader import CRMSettings, load_crm_config, use_real_integrations

__all__ = [
    'CRMSettings',
    'load_crm_config',
    'use_real_integrations',
]
