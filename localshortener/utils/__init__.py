from localshortener.utils.config import app_env, app_name, app_prefix, short_code_length, load_config
from localshortener.utils.helpers import require_environment
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'short_code_length',
    'load_config',
    'require_environment',
    'initialize_logging',
]
