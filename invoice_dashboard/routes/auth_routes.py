from flask import Blueprint, current_app, flash, redirect, render_template, url_for
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash

from invoice_dashboard import limiter
from invoice_dashboard.forms import LoginForm
from invoice_dashboard.models import User
from invoice_dashboard.utils.activity import log_activity

auth = Blueprint("auth", __name__)


@auth.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute")
def login():
    """Authenticate a user and start their session."""
    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data).first()

        if not user or not check_password_hash(user.password, form.password.data):
            flash("Invalid credentials.", "danger")
            return redirect(url_for("auth.login"))
        elif not user.active:
            flash("Please contact system admin to activate account.", "warning")
            return redirect(url_for("auth.login"))

        login_user(user)
        log_activity("Logged in", user.id)
        return redirect(url_for("main.overview"))

    return render_template(
        "auth/login.html", form=form, demo=current_app.config["DEMO"]
    )


@auth.route("/logout")
@login_required
def logout():
    """Log the current user out."""
    user_id = current_user.id
    logout_user()
    log_activity("Logged out", user_id)
    return redirect(url_for("auth.login"))
