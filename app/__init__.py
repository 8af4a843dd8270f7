"""Notification dispatcher application package.

Several subpackages (``app.domain``, ``app.application``,
``app.infrastructure``) are namespace packages; this file keeps ``app`` itself
a regular package so it cannot be shadowed by an installed distribution.
"""
