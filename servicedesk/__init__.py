"""Service desk notification backend package.

Ensures the local ``servicedesk`` package takes precedence over similarly
named dependencies that might be installed in the environment.
"""
