import logging
import os
import secrets
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, g, render_template, request
from flask_bootstrap import Bootstrap
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError
from werkzeug.security import generate_password_hash

load_dotenv()
db = SQLAlchemy()
cache = Cache()
login_manager = LoginManager()
login_manager.login_view = "auth.login"
storage_uri = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
limiter = Limiter(key_func=get_remote_address, storage_uri=storage_uri)
socketio = None


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(var_name: str, default: int) -> int:
    """Return an integer environment variable value or ``default``."""

    value = os.getenv(var_name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEFAULT_CSP_TEMPLATE = (
    "default-src 'self'; "
    "img-src 'self' data:; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "script-src 'self' https://cdn.jsdelivr.net 'nonce-{nonce}'; "
    "font-src 'self' data:; "
    "connect-src 'self' wss: https://cdn.jsdelivr.net; "
    "frame-ancestors 'self'; "
    "form-action 'self'; "
    "object-src 'none'; "
    "base-uri 'self'"
)
INVOICES_ROUTE = "/dashboard/invoices"
NAV_LINKS = {
    "main.overview": "Home",
    "invoices.view_invoices": "Invoices",
    "customers.view_customers": "Customers",
}


@login_manager.user_loader
def load_user(user_id):
    """Retrieve a user by ID for Flask-Login."""
    from invoice_dashboard.models import User

    return db.session.get(User, int(user_id))


def create_admin_user():
    """Ensure an admin user exists for the application."""
    from invoice_dashboard.models import User

    # Tables may not exist yet on first run or inside the test-suite.
    db.create_all()

    if User.query.first() is None:
        admin_email = os.getenv("ADMIN_EMAIL")
        raw_password = os.getenv("ADMIN_PASS")
        if raw_password is None:
            raise RuntimeError("ADMIN_PASS environment variable not set")
        admin_user = User(
            name="Admin",
            email=admin_email,
            password=generate_password_hash(raw_password),
            active=True,
        )
        db.session.add(admin_user)
        db.session.commit()
        logging.getLogger(__name__).info("Admin user created.")


def _configure_logging(app: Flask) -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger("invoice_dashboard").setLevel(level)


def create_app(args: list):
    """Application factory used by Flask."""
    global socketio
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    demo = "--demo" in args
    session_cookie_secure = _get_bool_env(
        "SESSION_COOKIE_SECURE", default=not demo
    )
    app.config["ENFORCE_HTTPS"] = _get_bool_env("ENFORCE_HTTPS", default=False)
    app.config.update(
        SESSION_COOKIE_SECURE=session_cookie_secure,
        REMEMBER_COOKIE_SECURE=session_cookie_secure,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=timedelta(minutes=30),
    )
    app.config["DEMO"] = demo
    # Bootstrap assets come from the package so the CSP can stay strict.
    app.config["BOOTSTRAP_SERVE_LOCAL"] = True

    # Absolute paths keep the database where it was created even if the
    # working directory changes afterwards (the test-suite does this).
    base_dir = os.getcwd()
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    else:
        default_db_path = os.path.join(base_dir, "invoices.db")
        db_path = os.getenv("DATABASE_PATH", default_db_path)
        if os.path.isdir(db_path):
            db_path = os.path.join(db_path, "invoices.db")
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    app.config["INVOICES_PER_PAGE"] = _get_int_env("INVOICES_PER_PAGE", 6)
    app.config["SEARCH_DEBOUNCE_MS"] = _get_int_env("SEARCH_DEBOUNCE_MS", 500)
    app.config["CACHE_TYPE"] = os.getenv("CACHE_TYPE", "SimpleCache")
    app.config["CACHE_DEFAULT_TIMEOUT"] = _get_int_env(
        "CACHE_DEFAULT_TIMEOUT", 300
    )

    _configure_logging(app)
    db.init_app(app)
    from flask_migrate import Migrate

    Migrate(app, db)
    login_manager.init_app(app)
    app.config["RATELIMIT_ENABLED"] = _get_bool_env(
        "RATELIMIT_ENABLED", default=not app.config.get("TESTING", False)
    )
    limiter.init_app(app)
    cache.init_app(app)
    Bootstrap(app)
    socketio = SocketIO(app)

    from invoice_dashboard.route_cache import RouteCache

    app.extensions["route_cache"] = RouteCache(cache, socketio=socketio)

    from invoice_dashboard.utils.formatting import (
        format_currency,
        format_date_to_local,
    )

    app.jinja_env.filters["currency"] = format_currency
    app.jinja_env.filters["local_date"] = format_date_to_local

    @app.context_processor
    def inject_nav_links():
        """Provide navigation labels to templates."""
        return dict(NAV_LINKS=NAV_LINKS)

    @app.context_processor
    def inject_search_settings():
        """Expose the search debounce window to the search widget."""
        return {"SEARCH_DEBOUNCE_MS": app.config["SEARCH_DEBOUNCE_MS"]}

    @app.before_request
    def set_csp_nonce():
        """Generate a nonce for inline scripts allowed by the CSP."""

        g.csp_nonce = secrets.token_urlsafe(16)

    @app.after_request
    def apply_security_headers(response):
        """Attach standard security headers to every response."""
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if request.is_secure or app.config.get("ENFORCE_HTTPS", False):
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        nonce = getattr(g, "csp_nonce", "")
        if not nonce:
            nonce = secrets.token_urlsafe(16)
            g.csp_nonce = nonce
        csp_template = app.config.get(
            "CONTENT_SECURITY_POLICY", DEFAULT_CSP_TEMPLATE
        )
        response.headers.setdefault(
            "Content-Security-Policy", csp_template.format(nonce=nonce)
        )
        return response

    @app.context_processor
    def inject_csp_nonce():
        """Expose the CSP nonce to templates for inline scripts."""

        return {"csp_nonce": getattr(g, "csp_nonce", "")}

    with app.app_context():
        # Create the schema on start so the app runs even when migrations
        # have not been applied yet.
        from . import models  # noqa: F401

        db.create_all()

        from invoice_dashboard.routes.auth_routes import auth
        from invoice_dashboard.routes.customer_routes import customers
        from invoice_dashboard.routes.invoice_routes import invoices
        from invoice_dashboard.routes.main_routes import main

        app.register_blueprint(auth, url_prefix="/auth")
        app.register_blueprint(main)
        app.register_blueprint(invoices)
        app.register_blueprint(customers)

        CSRFProtect(app)

        @app.errorhandler(CSRFError)
        def handle_csrf_error(error):
            """Render a helpful page when CSRF validation fails."""
            return (
                render_template(
                    "errors/csrf_error.html",
                    reason=error.description,
                ),
                400,
            )

        @app.errorhandler(404)
        def handle_not_found(error):
            """Render the not-found page used by missing invoices."""
            return render_template("errors/404.html"), 404

    return app, socketio
