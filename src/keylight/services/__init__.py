"""Business services.

Import the service modules directly; the rules module is shared with repositories.
"""
