from flask import Flask, jsonify, request
import os
import logging
from logging.handlers import RotatingFileHandler

from config import Config
from extensions import cors, limiter
from routes import api_bp, main_bp
from services import CheckoutService, MailService, format_krw


def setup_logging(app: Flask):
    """Attach the rotating file handler to the app logger"""
    app.logger.setLevel(logging.INFO)
    if not app.config.get('LOG_TO_FILE'):
        return

    log_dir = app.config.get('LOG_DIR', 'logs')
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    handler = RotatingFileHandler(os.path.join(log_dir, 'website.log'), maxBytes=10000000, backupCount=3)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    handler.setLevel(logging.INFO)
    app.logger.addHandler(handler)

    # Service modules log through their own module loggers
    for name in ('services', 'clients'):
        module_logger = logging.getLogger(name)
        module_logger.setLevel(logging.INFO)
        module_logger.addHandler(handler)


def create_app(config_object=Config) -> Flask:
    """
    Build the storefront application

    Args:
        config_object: Config class (or object) to load settings from

    Returns:
        Configured Flask app with checkout_service and mail_service attached
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app)
    app.logger.info('Website startup')

    cors.init_app(app, resources={r'/api/*': {'origins': '*'}}, send_wildcard=True)
    limiter.init_app(app)

    app.checkout_service = CheckoutService(
        secret_key=app.config.get('STRIPE_SECRET_KEY'),
        base_price_id=app.config.get('STRIPE_PRICE_ID'),
        add_on_price_id=app.config.get('STRIPE_ADDON_PRICE_ID'),
    )
    app.mail_service = MailService(
        user=app.config.get('EMAIL_USER'),
        password=app.config.get('EMAIL_PASS'),
        recipient=app.config['CONTACT_TO'],
        host=app.config['SMTP_HOST'],
        port=app.config['SMTP_PORT'],
    )
    if not app.checkout_service.configured:
        app.logger.warning('STRIPE_SECRET_KEY not set; checkout will be unavailable')
    if not app.mail_service.configured:
        app.logger.warning('EMAIL_USER/EMAIL_PASS not set; contact messages will only be logged')

    app.jinja_env.filters['krw'] = format_krw

    @app.context_processor
    def inject_contact():
        return {'mail_fallback_to': app.config.get('MAIL_FALLBACK_TO')}

    @app.errorhandler(429)
    def ratelimit_handler(e):
        app.logger.warning(f'Rate limit exceeded: {request.remote_addr} {request.path}')
        if request.path.startswith('/api/'):
            return jsonify({'error': f'Too many requests: {e.description}'}), 429
        return 'Too many requests', 429

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
