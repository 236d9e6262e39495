"""View rendering module for HTML templates.

This module handles all HTML/template rendering logic, separate from API routers.
Views are responsible for preparing context data and rendering Jinja2 templates.
"""
