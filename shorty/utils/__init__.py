from shorty.utils.config import ShortenerConfig, app_env, app_name, app_prefix, load_config
from shorty.utils.helpers import request_host, get_header, json_response, error_response, guarantee_500_response
from shorty.utils.logging import initialize_logging


__all__ = [
    'ShortenerConfig',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'request_host',
    'get_header',
    'json_response',
    'error_response',
    'guarantee_500_response',
    'initialize_logging',
]
