# Shared Common Library for the Ghseeli platform.
# Request plumbing shared by the platform's Django services: principal
# authentication, permissions, error rendering, middleware and health checks.

__version__ = "1.0.0"
