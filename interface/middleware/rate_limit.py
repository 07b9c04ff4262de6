from slowapi import Limiter
from slowapi.util import get_remote_address

from utils import get_app_settings

limiter = Limiter(key_func=get_remote_address, default_limits=[get_app_settings().rate_limit])
