import logging

import streamlit as st

import auth
from infrastructure.api.errors import SessionApiError
from use_cases.forms import LoginForm, RegisterForm, validate_form
from use_cases.route_guard import DEFAULT_AUTHENTICATED_PATH, LOGIN_PATH, REGISTER_PATH, resolve_next
from utils import session_manager

log = logging.getLogger(__name__)


def _show_field_errors(errors):
    for message in errors.values():
        st.error(message)


def render_login_screen(next_param=None):
    st.title("Welcome back")
    st.caption("Don't have an account?")
    if st.button("Sign up", key="to_register", type="tertiary"):
        session_manager.navigate(REGISTER_PATH)

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email", placeholder="Enter your email")
        password = st.text_input("Password", type="password", placeholder="Enter your password")
        submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

    if submitted:
        form, errors = validate_form(LoginForm, {"email": email, "password": password})
        if form is None:
            _show_field_errors(errors)
            return
        with st.spinner("Signing in..."):
            try:
                token = auth.login_user(form.email, form.password)
            except SessionApiError as e:
                st.error(e.message)
                return
        session_manager.login(token, resolve_next(next_param) or DEFAULT_AUTHENTICATED_PATH)


def render_register_screen():
    st.title("Create an account")
    st.caption("Already have an account?")
    if st.button("Sign in", key="to_login", type="tertiary"):
        session_manager.navigate(LOGIN_PATH)

    with st.form("register_form", clear_on_submit=False):
        name = st.text_input("Full Name", placeholder="Enter your full name")
        email = st.text_input("Email", placeholder="Enter your email")
        password = st.text_input("Password", type="password", placeholder="Create a password")
        confirm_password = st.text_input("Confirm Password", type="password", placeholder="Confirm your password")
        submitted = st.form_submit_button("Create account", type="primary", use_container_width=True)

    if submitted:
        form, errors = validate_form(
            RegisterForm,
            {"name": name, "email": email, "password": password, "confirm_password": confirm_password},
        )
        if form is None:
            _show_field_errors(errors)
            return
        with st.spinner("Creating account..."):
            try:
                token = auth.register_user(form.name, form.email, form.password)
            except SessionApiError as e:
                st.error(e.message)
                return
        session_manager.login(token, DEFAULT_AUTHENTICATED_PATH)
