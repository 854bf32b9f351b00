"""
Request validation for the pizzeria API.

Provides a small rule engine (rules.py) and the rule sets for login, users
and flavors (validators.py).
"""
