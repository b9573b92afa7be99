"""
Settings for the test suite: fixed throwaway secrets so the suite runs
without a ``.env``. Everything else comes from the regular settings.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret')

from .settings import *  # noqa: E402,F401,F403
