"""
Settings initialization - loads appropriate settings based on environment.
"""
import os

env = os.environ.get('DJANGO_ENV', 'development')

if env == 'test':
    from .test import *  # noqa: F401,F403
else:
    from .base import *  # noqa: F401,F403
