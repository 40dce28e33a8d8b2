"""
Flask extensions shared between the app factory and the blueprints.
"""
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Defaults and storage come from RATELIMIT_* config keys in init_app
limiter = Limiter(key_func=get_remote_address)
cors = CORS()
