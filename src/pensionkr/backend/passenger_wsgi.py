"""WSGI entrypoint for deploying the pensionkr backend behind Passenger."""

from pensionkr.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
