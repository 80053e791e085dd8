"""Routes for signing up, logging in and logging out."""
from __future__ import annotations

from functools import wraps

from flask import flash, g, redirect, render_template, request, session, url_for
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..logging_service import log_manager
from . import bp
from .services import authenticate, create_user, get_user


@bp.before_app_request
def load_logged_in_user() -> None:
    """Expose the session's user as ``g.user`` for every request."""

    user_id = session.get("user_id")
    g.user = get_user(user_id) if user_id is not None else None


def login_required(view):
    """Redirect anonymous visitors to the login page."""

    @wraps(view)
    def wrapped_view(*args, **kwargs):
        if g.get("user") is None:
            flash("Log in to manage your wishlist.", "error")
            return redirect(url_for("auth.login", next=request.path))
        return view(*args, **kwargs)

    return wrapped_view


@bp.route("/signup", methods=["GET", "POST"])
def signup():
    """Create an account and log the new user in."""

    form = {"username": "", "email": ""}
    if request.method == "POST":
        form["username"] = request.form.get("username", "")
        form["email"] = request.form.get("email", "")
        password = request.form.get("password", "")
        try:
            user = create_user(form["username"], form["email"], password)
        except ValueError as exc:
            flash(str(exc), "error")
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_manager.record(
                component="Auth",
                action="signup",
                level="error",
                result="error",
                title="Signup failed",
                user_summary="A new account could not be saved.",
                technical_details=f"auth.create_user raised {exc.__class__.__name__}: {exc}",
            )
            flash("We could not create your account. Try again shortly.", "error")
        else:
            session.clear()
            session["user_id"] = user.id
            log_manager.record(
                component="Auth",
                action="signup",
                level="info",
                result="success",
                title="Account created",
                user_summary=f"{user.username} signed up.",
                technical_details=f"auth.signup created user id={user.id}",
            )
            flash(f"Welcome to GameShelf, {user.username}!", "success")
            return redirect(url_for("catalog.browse"))

    return render_template(
        "auth/signup.html",
        title="GameShelf — Sign up",
        form=form,
        active_nav="signup",
    )


@bp.route("/login", methods=["GET", "POST"])
def login():
    """Check credentials and start a session."""

    if request.method == "POST":
        identifier = request.form.get("username", "")
        password = request.form.get("password", "")
        user = authenticate(identifier, password)
        if user is None:
            log_manager.record(
                component="Auth",
                action="login",
                level="warn",
                result="denied",
                title="Login rejected",
                user_summary="A login attempt used an unknown account or wrong password.",
                technical_details=f"auth.login failed for identifier={identifier.strip()!r}",
            )
            flash("Invalid username or password.", "error")
        else:
            session.clear()
            session["user_id"] = user.id
            log_manager.record(
                component="Auth",
                action="login",
                level="info",
                result="success",
                title="User logged in",
                user_summary=f"{user.username} logged in.",
                technical_details=f"auth.login started session for user id={user.id}",
            )
            next_path = request.args.get("next", "")
            if next_path.startswith("/") and not next_path.startswith("//"):
                return redirect(next_path)
            return redirect(url_for("catalog.browse"))

    return render_template(
        "auth/login.html",
        title="GameShelf — Log in",
        active_nav="login",
    )


@bp.route("/logout", methods=["POST"])
def logout():
    """End the current session."""

    session.clear()
    flash("You have been logged out.", "success")
    return redirect(url_for("catalog.browse"))
