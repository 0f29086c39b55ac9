"""
accounts/apps.py — App configuration for the operator accounts app

Purpose
===============================================================================
Operators (staff users) log in here to manage announcements, programs, board
members and push tokens. Visitors never have accounts; their state lives in
the session.

Key Points
- No models of its own: Django's auth User with is_staff is the operator.
- name: Must match the dotted path used in INSTALLED_APPS ("accounts").
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
