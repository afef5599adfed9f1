"""Catalog package"""
from . import locators
from .scenarios import (
    default_suite,
    home_checks,
    home_group,
    invalid_email_login,
    invalid_password_login,
    login_group,
    login_scenario,
    login_steps,
    scenario_names,
    select_scenarios,
    successful_login,
)

__all__ = [
    "locators",
    "default_suite",
    "home_checks",
    "home_group",
    "invalid_email_login",
    "invalid_password_login",
    "login_group",
    "login_scenario",
    "login_steps",
    "scenario_names",
    "select_scenarios",
    "successful_login",
]
