"""Completion backend credential handling

The credential is validated once at start-up so a missing key surfaces as
an explicit configuration error instead of a downstream 401.
"""

import os
from typing import Any, Dict, Mapping, Optional

from retail_insights.core.exceptions import ConfigurationError

API_KEY_ENV = 'ANTHROPIC_API_KEY'


def get_api_key(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    environ = os.environ if environ is None else environ
    value = environ.get(API_KEY_ENV)
    return value.strip() if value and value.strip() else None


def require_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the credential or raise ConfigurationError naming the variable"""
    api_key = get_api_key(environ)
    if not api_key:
        raise ConfigurationError(
            f"{API_KEY_ENV} is not set. Add it to the environment or .env.local "
            f"before requesting an analysis.",
            variable=API_KEY_ENV
        )
    return api_key


def describe_api_key(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Presence / length / prefix report for the debug endpoint"""
    api_key = get_api_key(environ)
    return {
        'hasKey': bool(api_key),
        'keyLength': len(api_key) if api_key else None,
        'keyStart': f"{api_key[:10]}..." if api_key else None
    }
